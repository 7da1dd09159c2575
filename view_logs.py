import os
import glob
import argparse
from pathlib import Path

# Path to logs based on project structure
PROJECT_ROOT = Path(__file__).resolve().parent
LOGS_DIR = PROJECT_ROOT / "rpa_logs" / "execution_logs"


def find_latest_log():
    log_files = glob.glob(str(LOGS_DIR / "execution_*.log"))
    if not log_files:
        return None
    return max(log_files, key=os.path.getmtime)


def view_latest_log(lines=None, task_id=None):
    if not LOGS_DIR.exists():
        print(f"Log directory not found: {LOGS_DIR}")
        return

    latest_log = find_latest_log()
    if not latest_log:
        print("No log files found.")
        return

    print(f"\n--- Reading Latest Log: {os.path.basename(latest_log)} ---\n")

    try:
        with open(latest_log, "r", encoding="utf-8") as f:
            content = f.read().splitlines()
    except OSError as e:
        print(f"Error reading log file: {e}")
        return

    # Every RPA line carries "[task_id]", so a search can be followed in isolation
    if task_id:
        content = [line for line in content if f"[{task_id}]" in line]
    if lines:
        content = content[-lines:]

    if content:
        print("\n".join(content))
    else:
        print("[File is empty]")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Show the latest RPA execution log.")
    parser.add_argument("-n", "--lines", type=int, help="only the last N lines")
    parser.add_argument("-t", "--task", help="only lines of this task id (e.g. busca_1a2b3c4d)")
    args = parser.parse_args()
    view_latest_log(args.lines, args.task)
