# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASK_TRACKER_APP_NAME": "App display name (default: task-tracker).",
    "TASK_TRACKER_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TASK_TRACKER_LOG_FILE": "Also write a debug log to <data dir>/task-tracker.log (true/false).",
    # Paths
    "TASK_TRACKER_DATA_DIR": "Local data dir (default: ~/.local/share/task-tracker).",
    "TASK_TRACKER_TASKS_PATH": "Tasks JSON file (default: <data dir>/tasks.json).",
}
