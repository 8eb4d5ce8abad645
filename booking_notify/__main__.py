"""Run the notifier API with uvicorn.

Usage:
    python -m booking_notify [--host 0.0.0.0] [--port 8000]
"""

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Booking notifier API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    # Logging is configured by the app lifespan from NotifierConfig
    uvicorn.run(
        "booking_notify.api.main:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
