import os
import sys

current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

from cinput.cin import cin
from cinput.tokens import Slot

# Exits with 0 only if the first token on stdin is the integer 1

def main() -> int:
    slot = Slot(int, 0)
    if not cin >> slot:
        return 1
    return 0 if slot.value == 1 else 1


if __name__ == "__main__":
    sys.exit(main())
