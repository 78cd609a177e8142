"""
Serialization helpers for CPLM objects (PluralInfo, rule tables, AST).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This is the interchange format handed to code emitters: every predicate
and derivation is written both as a typed tree and as rendered text.
The text is informational; loading only reads the trees.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from cplm.backends.text_renderer import render_assignment, render_expression
from cplm.expressions import (
    Assignment,
    BinaryExpression,
    BinaryOperator,
    Expression,
    FunctionCall,
    Literal,
    VariableReference,
)
from cplm.model import (
    Category,
    CategoryPredicate,
    CultureRules,
    LocaleRuleTable,
    LocaleSamples,
    PluralInfo,
    SampleSet,
)
from cplm.operands import ModuloVariable, Operand


def expr_to_dict(expr: Expression | None) -> Any:
    if expr is None:
        return None
    if isinstance(expr, BinaryExpression):
        return {
            "type": "binary",
            "operator": expr.operator.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }
    if isinstance(expr, VariableReference):
        return {"type": "var", "name": expr.name}
    if isinstance(expr, Literal):
        return {"type": "lit", "value": expr.value}
    if isinstance(expr, FunctionCall):
        return {
            "type": "call",
            "name": expr.name,
            "arguments": [expr_to_dict(a) for a in expr.arguments],
        }
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Any) -> Expression | None:
    if d is None:
        return None
    t = d.get("type")
    if t == "binary":
        op = BinaryOperator(d["operator"])
        left = expr_from_dict(d["left"])
        right = expr_from_dict(d["right"])
        return BinaryExpression(operator=op, left=left, right=right)
    if t == "var":
        return VariableReference(d["name"])
    if t == "lit":
        return Literal(d["value"])
    if t == "call":
        return FunctionCall(d["name"], tuple(expr_from_dict(a) for a in d.get("arguments", [])))
    raise TypeError(f"Unsupported expression dict type: {t}")


def assignment_to_dict(a: Assignment) -> Dict[str, Any]:
    return {
        "targets": list(a.targets),
        "expression": expr_to_dict(a.expression),
        "text": render_assignment(a),
    }


def assignment_from_dict(d: Dict[str, Any]) -> Assignment:
    return Assignment(targets=tuple(d["targets"]), expression=expr_from_dict(d["expression"]))


def predicate_to_dict(p: CategoryPredicate) -> Dict[str, Any]:
    return {
        "category": p.category.value,
        "condition": expr_to_dict(p.condition),
        "text": render_expression(p.condition) if p.condition is not None else None,
    }


def predicate_from_dict(d: Dict[str, Any]) -> CategoryPredicate:
    return CategoryPredicate(category=Category(d["category"]), condition=expr_from_dict(d.get("condition")))


def modulo_to_dict(m: ModuloVariable) -> Dict[str, Any]:
    return {"name": m.name, "operand": m.operand.symbol, "modulus": m.modulus}


def modulo_from_dict(d: Dict[str, Any]) -> ModuloVariable:
    return ModuloVariable(operand=Operand.from_symbol(d["operand"]), modulus=d["modulus"])


def table_to_dict(t: LocaleRuleTable) -> Dict[str, Any]:
    return {
        "cardinal": [predicate_to_dict(p) for p in t.cardinal],
        "ordinal": [predicate_to_dict(p) for p in t.ordinal] if t.ordinal is not None else None,
        "operands": [op.symbol for op in t.operands],
        "modulo_variables": [modulo_to_dict(m) for m in t.modulo_variables],
        "preamble": [assignment_to_dict(a) for a in t.preamble],
    }


def table_from_dict(d: Dict[str, Any]) -> LocaleRuleTable:
    ordinal = d.get("ordinal")
    return LocaleRuleTable(
        cardinal=tuple(predicate_from_dict(p) for p in d["cardinal"]),
        ordinal=tuple(predicate_from_dict(p) for p in ordinal) if ordinal is not None else None,
        operands=tuple(Operand.from_symbol(s) for s in d.get("operands", [])),
        modulo_variables=tuple(modulo_from_dict(m) for m in d.get("modulo_variables", [])),
        preamble=tuple(assignment_from_dict(a) for a in d.get("preamble", [])),
    )


def sample_set_to_dict(s: SampleSet) -> Dict[str, Any]:
    return {"category": s.category.value, "integers": list(s.integers), "decimals": list(s.decimals)}


def sample_set_from_dict(d: Dict[str, Any]) -> SampleSet:
    return SampleSet(
        category=Category(d["category"]),
        integers=tuple(d.get("integers", [])),
        decimals=tuple(d.get("decimals", [])),
    )


def samples_to_dict(s: LocaleSamples) -> Dict[str, Any]:
    return {
        "cardinal": [sample_set_to_dict(x) for x in s.cardinal],
        "ordinal": [sample_set_to_dict(x) for x in s.ordinal],
    }


def samples_from_dict(d: Dict[str, Any] | None) -> LocaleSamples:
    if d is None:
        return LocaleSamples()
    return LocaleSamples(
        cardinal=tuple(sample_set_from_dict(x) for x in d.get("cardinal", [])),
        ordinal=tuple(sample_set_from_dict(x) for x in d.get("ordinal", [])),
    )


def culture_to_dict(c: CultureRules) -> Dict[str, Any]:
    return {
        "name": c.name,
        "langs": list(c.langs),
        "table": table_to_dict(c.table),
        "samples": samples_to_dict(c.samples),
    }


def culture_from_dict(d: Dict[str, Any]) -> CultureRules:
    return CultureRules(
        name=d["name"],
        langs=tuple(d.get("langs", [])),
        table=table_from_dict(d["table"]),
        samples=samples_from_dict(d.get("samples")),
    )


def plural_info_to_dict(info: PluralInfo) -> Dict[str, Any]:
    return {
        "cultures": [culture_to_dict(c) for c in info.cultures],
        "others": list(info.others),
    }


def plural_info_from_dict(d: Dict[str, Any]) -> PluralInfo:
    return PluralInfo(
        cultures=tuple(culture_from_dict(c) for c in d.get("cultures", [])),
        others=tuple(d.get("others", [])),
    )


def plural_info_to_json(info: PluralInfo) -> str:
    return json.dumps(plural_info_to_dict(info), sort_keys=True)


def plural_info_from_json(s: str) -> PluralInfo:
    d = json.loads(s)
    return plural_info_from_dict(d)


def plural_info_to_yaml(info: PluralInfo) -> str:
    return yaml.safe_dump(plural_info_to_dict(info), sort_keys=False, allow_unicode=True)


def plural_info_from_yaml(s: str) -> PluralInfo:
    d = yaml.safe_load(s)
    return plural_info_from_dict(d)
