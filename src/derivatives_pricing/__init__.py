"""Binomial, Black-Scholes and futures-hedge calculators."""
