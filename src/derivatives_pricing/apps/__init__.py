"""Command-line entry points for the calculators."""
