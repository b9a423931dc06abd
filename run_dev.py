#!/usr/bin/env python3
"""
Development server runner using Gunicorn with eventlet workers.
Round clocks run on green threads, so Flask's built-in server is not used.
"""

import os
import subprocess
import sys


def describe_server():
    """Address and message queue the server will use, for the startup banner."""
    try:
        from config_factory import load_config
        config = load_config()
    except Exception as e:
        return f"http://localhost:{os.environ.get('PORT', 8000)}", f"unknown ({e})"

    queue = config.message_queue_url or 'disabled (single process)'
    return f"http://{config.host}:{config.port}", queue


def main():
    """Run the development server with Gunicorn."""
    os.environ.setdefault('FLASK_ENV', 'development')
    os.environ.setdefault('PORT', '8000')

    server_url, queue = describe_server()

    cmd = [
        'gunicorn',
        '--config', 'gunicorn.conf.py',
        '--reload',
        '--log-level', 'info',
        'wsgi:app'
    ]

    print("Starting CardParty development server with Gunicorn...")
    print(f"Server will be available at: {server_url}")
    print(f"Socket.IO message queue: {queue}")
    print("Press Ctrl+C to stop the server")
    print("-" * 50)

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        print("\nShutting down development server...")
    except subprocess.CalledProcessError as e:
        print(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
