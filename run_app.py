#!/usr/bin/env python3
"""
Addiscart Backend Runner
========================

Usage:
    python run_app.py                    # Development server with auto-reload
    python run_app.py --mode prod        # Production mode, no reload
    python run_app.py --port 8001        # Custom port
    python run_app.py --init-db          # Create tables, then run
    python run_app.py --seed             # Load sample data, then run
    python run_app.py --seed --reset     # Drop everything, reseed, then run
    python run_app.py --seed --no-serve  # Only seed
"""

import argparse
import asyncio
import os
import sys

def print_banner():
    """Print application banner"""
    banner = """
╔═══════════════════════════════════════════════════════╗
║                 🛒 Addiscart Backend                  ║
║            Grocery delivery platform API              ║
╚═══════════════════════════════════════════════════════╝
"""
    print(banner)

def check_environment():
    """Check if environment is properly set up"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, reading settings from the environment")

    missing = [key for key in ("DATABASE_URL", "SECRET_KEY") if key not in os.environ]
    if missing and not os.path.exists(".env"):
        print(f"❌ Missing required settings: {', '.join(missing)}")
        return False

    return True

def init_database(seed: bool, reset: bool) -> bool:
    """Create tables, optionally loading sample data"""
    from app.core.database import init_db, drop_db
    from app.utils.seeder import seed_database

    async def _run():
        if seed:
            return await seed_database(reset=reset)
        if reset:
            await drop_db()
        await init_db()
        return True

    if asyncio.run(_run()):
        print("✅ Database ready" + (" with sample data" if seed else ""))
    else:
        print("ℹ️  Database already populated, nothing seeded")
    return True

def run_main_app(host, port, reload=True, workers=1):
    """Run the FastAPI application"""
    print(f"\n🚀 Starting Addiscart API on {host}:{port}")
    print(f"📖 API Docs: http://localhost:{port}/api/docs")
    print("\n" + "=" * 50)

    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level="info"
    )

def main():
    parser = argparse.ArgumentParser(
        description="Addiscart Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument("--host", default=None, help="Host to bind to (default: settings.HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (default: settings.PORT)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    parser.add_argument("--init-db", action="store_true", help="Create database tables before running")
    parser.add_argument("--seed", action="store_true", help="Load sample data before running")
    parser.add_argument("--reset", action="store_true", help="Drop all tables first (with --init-db or --seed)")
    parser.add_argument("--no-serve", action="store_true", help="Exit after database setup")

    args = parser.parse_args()

    print_banner()

    if not check_environment():
        return 1

    from app.core.config import settings

    if args.init_db or args.seed:
        init_database(seed=args.seed, reset=args.reset)

    if args.no_serve:
        return 0

    reload = not args.no_reload and args.mode != "prod"
    run_main_app(
        args.host or settings.HOST,
        args.port or settings.PORT,
        reload=reload,
        workers=settings.WORKERS
    )
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
