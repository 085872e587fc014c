#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the local plan/order tables at DATABASE_URL
"""

import sys
import os

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from app.config import settings
from domain.models import init_database

if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("DinnerPlan Database Initialization")
    print("=" * 60)
    print(f"\nTarget: {settings.database_url}\n")

    try:
        init_database()
    except Exception as exc:
        print(f"FAILED! {exc}")
        sys.exit(1)

    print("SUCCESS! Tables are ready.")
    sys.exit(0)
