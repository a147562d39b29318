# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "PACER_APP_NAME": "App display name (default: batch-pacer).",
    "PACER_LOG_LEVEL": "Console logging level (default: INFO).",
    "PACER_LOG_DIR": "Directory for pacer.log (default: .local/pacer).",
    # Scheduler tuning
    "PACER_CONCURRENCY": "Default concurrency limit (default: 3; non-positive => 3).",
    "PACER_WINDOW_SIZE": "Smoother window size (default: 10; non-positive => 10).",
    # Demo
    "PACER_DEMO_ITEMS": "Number of simulated jobs in the demo batch (default: 20).",
    "PACER_DEMO_MAX_DELAY": "Max simulated latency per demo job in seconds (default: 0.5).",
}
