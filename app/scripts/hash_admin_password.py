"""
Print a bcrypt hash to use as ADMIN_PASSWORD instead of the plain password.

Usage: python -m app.scripts.hash_admin_password 'S3cret!'
"""

import argparse
import sys

from app.auth.security import hash_password, verify_password

BCRYPT_MAX_BYTES = 72


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("password", help="Plain admin password")
    args = parser.parse_args(argv)

    if not args.password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    if len(args.password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        print(f"Password must be at most {BCRYPT_MAX_BYTES} bytes for bcrypt", file=sys.stderr)
        return 1

    try:
        hashed = hash_password(args.password)
    except ValueError as e:
        print(f"Could not hash password: {e}", file=sys.stderr)
        return 1
    # Sanity check before handing it out
    if not verify_password(args.password, hashed):
        print("Generated hash failed verification", file=sys.stderr)
        return 1
    print(hashed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
