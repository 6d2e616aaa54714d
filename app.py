#!/usr/bin/env python3
"""
Main entry point for the Utility Toolbox application.
This file serves as the application launcher that imports and runs the Flask app from the src directory.
"""

import sys
import os
import argparse
import logging
from pathlib import Path

# Add the src directory to the Python path so we can import from it
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

# Now we can import the main Flask application
from main import app

if __name__ == '__main__':
    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Utility Toolbox Server')
    parser.add_argument('--port', '-p', type=int, default=8000,
                       help='Port to run the server on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                       help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--debug', action='store_true',
                       help='Run Flask in debug mode')
    parser.add_argument('--log-level', default=os.environ.get('TOOLBOX_LOG_LEVEL', 'INFO'),
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level (default: INFO)')
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Change working directory to project root to ensure relative paths work correctly
    os.chdir(project_root)

    try:
        logging.getLogger(__name__).info("Starting Utility Toolbox on http://%s:%s", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        print("\nServer stopped by user")
