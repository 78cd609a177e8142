#!/usr/bin/env python3
"""
Complete Pipeline Demo: CLDR rules → CPLM → Tables → YAML

Shows the full workflow:
1. Compile the bundled CLDR excerpt
2. Print the deduplicated rule tables
3. List the locales without plural rules
4. Dump the interchange document
"""

import logging

from cplm.backends import describe_table
from cplm.examples import build_example_plural_info
from cplm.options import options_from_yaml
from cplm.serialization import plural_info_to_yaml


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: CLDR → CPLM → Tables → YAML")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Compile
    # =========================================================================
    print("\n1. COMPILING PLURAL RULES...")
    options = options_from_yaml("locales: '*'\nmissing_other: skip\n")
    info = build_example_plural_info(options)
    print(f"   ✓ Rule tables: {len(info.cultures)}")
    print(f"   ✓ Locales covered: {len(info.cultures_map())}")

    # =========================================================================
    # STEP 2: Tables
    # =========================================================================
    print("\n2. RULE TABLES...")
    for culture in info.cultures:
        print(f"\n   [{culture.name}] langs: {', '.join(culture.langs)}")
        for line in describe_table(culture.table).splitlines():
            print(f"      {line}")

    # =========================================================================
    # STEP 3: Others
    # =========================================================================
    print("\n3. LOCALES WITHOUT PLURAL RULES...")
    print(f"   {', '.join(info.others) or '(none)'}")

    # =========================================================================
    # STEP 4: Interchange document
    # =========================================================================
    print("\n4. YAML DOCUMENT (first lines)...")
    for line in plural_info_to_yaml(info).splitlines()[:25]:
        print(f"   {line}")

    print("\n" + "=" * 80)
    print("✅ PIPELINE COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
