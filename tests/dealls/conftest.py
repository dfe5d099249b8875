import sys
from pathlib import Path

# Add project root to sys.path to allow importing root modules
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Fixtures and the logging/reporting hooks live in the root Dealls conftest
from Dealls_Conftest import *
