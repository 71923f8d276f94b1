import sys
from pathlib import Path

import pytest

# ensure project root is importable for tests
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from models import Presentation, Slide


@pytest.fixture
def demo_presentation():
    return Presentation(
        title="Demo",
        slides=[
            Slide(title="_", content=["sub text"]),
            Slide(title="Body", content=["a", "b"], notes="say this"),
        ],
    )
