#!/usr/bin/env python3
"""
Main entry point for Google App Engine deployment
This builds the Flask app from idea_miner.web_api
"""

import logging
import os

from idea_miner.web_api import create_app

logging.basicConfig(level=logging.INFO)
app = create_app()

if __name__ == '__main__':
    # For local development
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port, debug=False)
