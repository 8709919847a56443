"""
Relay routes and the reply-to-settings pipeline behind them.

Every route follows the same steps: build a prompt from a static parameter
table, call the model, pull the JSON object out of the reply, clamp each
expected field into its bounds.
"""
