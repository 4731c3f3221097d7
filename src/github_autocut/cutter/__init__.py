"""Autocut core: matching, dispatch, and the GitHub tracker behind them."""
