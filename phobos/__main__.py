"""
Lets you say:

    py -m phobos program.json

which does the same as the "phobos" console script.
"""
from .cmdline import main

main()
