"""
Console Entry Point for Wallet Tracker

Starts one interactive wallet session on stdin/stdout.
Configuration comes from WALLET_* environment variables or a .env file.

Usage:
    python app/main.py
"""

from wallet_tracker.terminal import main


if __name__ == "__main__":
    main()
