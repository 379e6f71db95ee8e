# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting without opening the code.
"""

ENV_VARS = {
    # App / logging
    "EISEN_APP_NAME": "App display name (default: eisen-triage).",
    "EISEN_LOG_LEVEL": "Console logging level (default: INFO).",
    "EISEN_DATA_DIR": "Local data directory for triage.log (default: .local/eisen).",
    # Refinement (local text-generation service)
    "EISEN_REFINE_ENABLED": "Start the console with local refine on (true/false, default: false).",
    "EISEN_REFINE_ENDPOINT": (
        "Ollama-style generate endpoint (default: http://localhost:11434/api/generate). "
        "Empty => offline refiner, every refinement falls back."
    ),
    "EISEN_REFINE_MODEL": "Model identifier sent with each request (default: llama3.2).",
    "EISEN_REFINE_TEMPERATURE": "Decoding temperature hint (default: 0.2).",
    "EISEN_REFINE_TIMEOUT_MS": "Time budget per refinement, in milliseconds (default: 3000).",
}
