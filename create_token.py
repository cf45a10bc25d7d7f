"""Print a signed access token for a username.

Handy for calling the API from curl or scripts without going through
``/api/login``.  The token is only accepted if a user with that
username exists in the running server's store.

Usage:
    python create_token.py farmer1 --days 30
"""
import argparse

from agri_market_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("--days", type=int, default=1, help="token lifetime in days")
    args = parser.parse_args()
    print(create_access_token({"sub": args.username}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
