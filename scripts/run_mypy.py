import os
import sys
from mypy import api

# Run from the repository root so the [tool.mypy] section of pyproject.toml
# is picked up no matter where the script is invoked from.
os.chdir(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

stdout, stderr, exit_status = api.run(sys.argv[1:] or ["hack_asm"])
print(stdout, end="")
print(stderr, end="", file=sys.stderr)
sys.exit(exit_status)
