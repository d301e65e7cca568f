"""Run with: python -m timertable"""
from timertable.main import main

if __name__ == "__main__":
    main()
