# rotation_guard/app.py
"""Application factory for Rotation Guard"""
import logging

from flask import Flask, redirect, session, url_for

from rotation_guard.config import config
from rotation_guard.extensions import csrf, db, guard


def create_app(config_name='default', **overrides):
    """
    Create and configure Flask application

    Args:
        config_name: Key of the config dictionary
        overrides: Settings applied on top of the selected config
    """
    app = Flask(__name__,
                template_folder='templates')

    # Load configuration
    app.config.from_object(config[config_name])
    app.config.update(overrides)
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    csrf.init_app(app)
    guard.init_app(app)

    # Register blueprints
    from rotation_guard.controllers import admin_bp, api_bp, auth_bp, dashboard_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(dashboard_bp, url_prefix='/dashboard')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/')
    def index():
        if 'user_id' in session:
            return redirect(url_for('dashboard.index'))
        return redirect(url_for('auth.login'))

    register_error_handlers(app)

    from rotation_guard.cli import rotation_cli
    app.cli.add_command(rotation_cli)

    # Create database tables; first start arms the rotation requirement
    with app.app_context():
        from rotation_guard import models  # noqa: F401
        db.create_all()
        if app.config['ROTATION_ARM_ON_INSTALL'] and guard.install():
            app.logger.info('Rotation requirement armed on install')

    return app


def configure_logging(app):
    level = app.config.get('LOG_LEVEL', 'INFO')
    app.logger.setLevel(level)
    logging.getLogger('rotation_guard').setLevel(level)


def register_error_handlers(app):
    """Register error handlers"""
    @app.errorhandler(403)
    def forbidden(error):
        return "Insufficient permissions.", 403

    @app.errorhandler(404)
    def not_found(error):
        return "Page not found", 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return "Internal server error", 500
