import os
import sys

current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

from cinput.cin import pause, read_next, read_safe

# --- Interactive prompt example ---

if __name__ == "__main__":
    print("How many numbers? ", end="")
    count = read_safe(int, 0)
    total = 0
    for i in range(count):
        print(f"Number {i + 1}: ", end="")
        total += read_next(int)
    print(f"Sum: {total}")
    pause("Press enter to exit...")
