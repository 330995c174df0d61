#!/usr/bin/env python3
"""
Application startup script with environment configuration support.
"""

import argparse
import sys

from poisync.config.loader import ConfigLoader, load_config_for_environment


def main():
    """Main startup function with environment configuration"""
    parser = argparse.ArgumentParser(description="POI Sync Server")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument("--host", default=None, help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (overrides config)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (overrides config)")
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="List available environment configurations"
    )

    args = parser.parse_args()

    if args.list_envs:
        print("Available environment configurations:")
        for env in ConfigLoader.get_available_environments():
            print(f"  - {env}")
        return

    try:
        settings = load_config_for_environment(args.env)
        print(f"✓ Loaded configuration for environment: {settings.environment.value}")
    except Exception as e:
        print(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.reload:
        settings.reload = True

    print(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {settings.host}")
    print(f"   Port: {settings.port}")
    print(f"   Default language: {settings.poi.default_language}")
    print(f"   OSM API: {settings.osm.api_url}")

    import uvicorn

    uvicorn.run(
        "poisync.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=settings.workers if not settings.reload else 1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
