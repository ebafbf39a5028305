#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
import random
from datetime import date, timedelta
from pathlib import Path


HEADER = [
    "id",
    "cin",
    "company_name",
    "company_roc_code",
    "company_category",
    "company_sub_category",
    "company_class",
    "authorized_capital",
    "paidup_capital",
    "company_registration_date",
    "registered_office_address",
    "listing_status",
    "company_status",
    "company_state_code",
    "company_indian_foreign",
    "nic_code",
    "company_industrial_classification",
]

CLASSES = ["Private", "Public", "One Person Company"]
STATUSES = ["Active", "Strike Off", "Amalgamated", "Under Liquidation"]
INDUSTRIES = [
    ("62011", "Computer programming"),
    ("10799", "Food products"),
    ("41001", "Construction of buildings"),
    ("46900", "Wholesale trade"),
    ("64191", "Banking"),
]
WORDS = ["Karnataka", "Deccan", "Nandi", "Cauvery", "Mysore", "Tech", "Agro", "Infra", "Foods", "Textiles"]


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample companies CSV")
    parser.add_argument("--output", required=True, help="output file path (.csv)")
    parser.add_argument("--rows", type=int, default=1000, help="number of companies")
    parser.add_argument("--seed", type=int, default=7, help="random seed")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", newline="", encoding="utf-8") as fp:
        writer = csv.writer(fp)
        writer.writerow(HEADER)
        for index in range(1, args.rows + 1):
            company_class = rng.choice(CLASSES)
            registered = date(1990, 1, 1) + timedelta(days=rng.randint(0, 12500))
            authorized = rng.choice([100000, 500000, 1000000, 5000000, None])
            paidup = None if authorized is None else round(authorized * rng.uniform(0.1, 1.0), 2)
            nic_code, industry = rng.choice(INDUSTRIES)
            name = f"{rng.choice(WORDS)} {rng.choice(WORDS)} {'Private Limited' if company_class == 'Private' else 'Limited'}"
            writer.writerow([
                index,
                f"U{nic_code}KA{registered.year}PTC{index:06d}",
                name.upper(),
                "RoC-Bangalore",
                "Company limited by Shares",
                "Non-govt company",
                company_class,
                "" if authorized is None else authorized,
                "" if paidup is None else paidup,
                registered.isoformat(),
                f"{index} MG Road, Bengaluru",
                "Listed" if rng.random() < 0.05 else "Unlisted",
                rng.choice(STATUSES),
                "KARNATAKA",
                "Indian",
                nic_code,
                industry,
            ])

    print(f"companies CSV generated: {output}")


if __name__ == "__main__":
    main()
