"""Candidate search, crossing tests and the coverage solver for Strands puzzles."""
