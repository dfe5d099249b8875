import sys
from pathlib import Path

# Browser-free tests only need the project root importable
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))
