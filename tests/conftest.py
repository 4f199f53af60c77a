import sys
from pathlib import Path

# Put the project root on sys.path so tests can import the modules
# without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
