"""
main.py — Play a match in the terminal
=======================================

This is the entry point. Point it at your match service and run.

    python main.py

The runner will:
  1. Load the opponent catalog from the service
  2. Show the intro, rules and opponent screens
  3. Send your moves (c / d) one round at a time
  4. Show the results and leaderboard, then clean up the session

Type 'quit' or press Ctrl+C to stop.
"""

from dilemma_client import MatchRunner, TerminalPresenter

# ── Configuration ──
config = {
    # Match service root, including the /api base path
    "base_url": "http://localhost:8080/api",

    # Per-call timeout (seconds); expiry is reported as a network error
    "timeout_seconds": 10,

    # Rounds per match (the service may clamp this)
    "total_rounds": 10,

    # Pause between the final round and the results screen
    "summary_delay_seconds": 1.4,

    # JSON log file
    "log_file": "dilemma_client.log",
}

# ── Create the presenter and run ──
runner = MatchRunner(config=config, presenter=TerminalPresenter())
runner.run()
