"""
Print a couple of example evaluations.
"""
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tvmcalc.config import get_settings
from tvmcalc.params import build_formula


def main():
    logging.basicConfig(level=get_settings().log_level)

    fv = build_formula(
        "fv", {"rate": 0.075, "nper": 20, "pmt": -2000.0, "pv": 0.0, "when": "end"}
    )
    print(f"{fv} fv is {fv.get()}")

    pmt = build_formula(
        "pmt", {"rate": 0.08 / 12, "nper": 60, "pv": 15000.0, "fv": 0.0, "when": "end"}
    )
    print(f"{pmt} pmt is {pmt.get()}")


if __name__ == "__main__":
    main()
