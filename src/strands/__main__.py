"""Allow running the solver with `python -m strands`."""

from strands import main

main()
