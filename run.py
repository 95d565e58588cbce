"""Application entry point for Rotation Guard"""
import logging
import os

from rotation_guard.app import create_app

logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app = create_app(os.environ.get('FLASK_CONFIG', 'default'))

if __name__ == "__main__":
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
