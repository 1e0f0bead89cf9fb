#!/usr/bin/env python3
# =============================================================================
# scripts/issue_session.py - Issue a Session Token for Local Testing
# =============================================================================
# Sign-in happens outside this service, so this script creates a session
# for an existing user and prints the bearer token.
#
# Usage:
#   poetry run python scripts/issue_session.py <user_id>
#   curl -H "Authorization: Bearer <token>" http://localhost:8000/api/v1/auth/me
#
# Requires SESSION_BACKEND=supabase: a memory-backed session would be gone
# as soon as this script exits.
# =============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from app.exceptions import LeasingAPIException
from core.services.session_service import get_session_service
from lib.supabase_client import SupabaseClient


def main():
    parser = argparse.ArgumentParser(description="Issue a session token for a user")
    parser.add_argument("user_id", help="ID of an existing user")
    args = parser.parse_args()

    if settings.SESSION_BACKEND != "supabase":
        print("SESSION_BACKEND must be 'supabase' to issue tokens from a script")
        sys.exit(1)

    user = SupabaseClient.fetch_user(args.user_id)
    if not user:
        print(f"User {args.user_id} not found")
        sys.exit(1)

    try:
        issued = get_session_service().create_session(args.user_id)
    except LeasingAPIException as e:
        print(f"Error [{e.code}]: {e.message}")
        sys.exit(1)

    print(f"User:    {user.get('email') or args.user_id} ({user.get('role') or 'USER'})")
    print(f"Expires: {issued.expires_at.isoformat()}")
    print()
    print(issued.token)


if __name__ == "__main__":
    main()
