#!/usr/bin/env python3
"""
Mint a bearer token for local testing of the dashboard and admission APIs.

Usage:
  python scripts/issue_token.py <user_id> [student|teacher|admin] [minutes]
  # Uses SECRET_KEY / ALGORITHM from .env (or export)

Example:
  TOKEN=$(python scripts/issue_token.py 1b4e28ba-2fa1-11d2-883f-0016d3cca427 admin)
  curl -H "Authorization: Bearer $TOKEN" http://localhost:8000/api/dashboard/overview
"""
import os
import sys
from datetime import timedelta
from uuid import UUID

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.security import create_access_token
from app.models.enums import UserRole


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    try:
        user_id = UUID(sys.argv[1])
        role = UserRole(sys.argv[2]) if len(sys.argv) > 2 else UserRole.ADMIN
        minutes = int(sys.argv[3]) if len(sys.argv) > 3 else 60
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    token = create_access_token(
        data={"sub": str(user_id), "role": role.value},
        expires_delta=timedelta(minutes=minutes),
    )
    print(token)


if __name__ == "__main__":
    main()
