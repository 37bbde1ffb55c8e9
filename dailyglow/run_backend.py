#!/usr/bin/env python
"""
Persistent backend runner for Daily Glow.
Keeps uvicorn running even if it crashes.
"""
import subprocess
import sys
import time


def main(port: int = 8000) -> None:
    while True:
        print(f"\n[INFO] Starting backend server on port {port}...")
        try:
            subprocess.run([sys.executable, "-m", "uvicorn", "dailyglow.main:app", "--port", str(port)], check=False)
        except KeyboardInterrupt:
            print("\n[INFO] Shutting down backend...")
            break

        print("[INFO] Backend stopped, will restart in 2 seconds...")
        time.sleep(2)


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 8000)
