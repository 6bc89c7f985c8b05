from __future__ import annotations

import random
from pathlib import Path

import pandas as pd


def main(out_path: str = "test_data/sample_measurements.csv", n: int = 500, seed: int = 42) -> None:
    """
    Write a small mixed-type CSV for trying the viewer and CLI.

    The file carries the edge cases the panels care about: missing cells in
    numeric columns, a constant column, a column whose first value is a
    number but which also holds text, and labels containing commas and quotes.
    """
    random.seed(seed)

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    species = ["setosa", "versicolor", "virginica"]
    sites = ['North, upper', 'South "B"', "East", "West"]

    rows = []
    for i in range(n):
        sp = random.choices(species, weights=[0.4, 0.35, 0.25], k=1)[0]
        base = {"setosa": 5.0, "versicolor": 5.9, "virginica": 6.6}[sp]
        length = round(random.gauss(base, 0.4), 2)
        width = round(length * 0.45 + random.gauss(0, 0.2), 2)

        # Missing measurements in a few rows
        if random.random() < 0.03:
            width = None

        # Mostly numeric, occasionally a text code
        grade = random.randint(1, 5) if random.random() > 0.05 else "n/a"

        rows.append(
            {
                "sample_id": i + 1,
                "species": sp,
                "site": random.choice(sites),
                "length": length,
                "width": width,
                "grade": grade,
                "batch": 7,
            }
        )

    df = pd.DataFrame(rows)
    df.to_csv(out, index=False)
    print(f"Wrote {len(df):,} rows to {out.resolve()}")


if __name__ == "__main__":
    main()
