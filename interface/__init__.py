"""
Interface package: text front ends for the mini-shogi engine.

Modules:
    notation — Move notation ("1524", "S42") and 5x5 SFEN position strings
    render   — Plain-text board diagram
    cli      — Interactive human-vs-engine game in the terminal
    usi      — USI-style stdin/stdout protocol handler: python -m interface.usi
"""
