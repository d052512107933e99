"""Start the Booking Platform API.

Configuration such as MONGO_URL and PORT is read from the environment
or from a `.env` file in the working directory.

Usage:
    python run.py
"""
from booking_api.app.server import run


if __name__ == "__main__":
    run()
