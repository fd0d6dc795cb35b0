# Ensures the project root is on sys.path so imports like `from core...` work.
import sys
from pathlib import Path

import pytest

# tests/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

HEADER = "first_name,last_name,company_name,address,city,county,state,zip,phone1,phone2,email,web"


def make_row(first="James", last="Butt", company="Benton, John B Jr", state="LA", city="New Orleans", county="Orleans"):
    return ",".join(
        [
            first,
            last,
            f'"{company}"',
            '"6649 N Blue Gum St"',
            city,
            county,
            state,
            "70116",
            "504-621-8927",
            "504-845-1427",
            "jbutt@gmail.com",
            "http://www.bentonjohnbjr.com",
        ]
    )


@pytest.fixture
def sample_csv():
    rows = [
        make_row(),
        make_row(first="Josephine", last="Darakjy", company="Chanay, Jeffrey A Esq", state="MI", city="Brighton", county="Livingston"),
        make_row(first="Art", last="Venere", company="Chemel, James L Cpa", state="NJ", city="Bridgeport", county="Gloucester"),
    ]
    return "\r\n".join([HEADER] + rows) + "\r\n"
