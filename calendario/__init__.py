from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_cors import CORS
from sqlalchemy import event
import logging
import time

# Inicialización de extensiones fuera de la función create_app
db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
cors = CORS()

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    # Creación de la aplicación
    app = Flask(__name__)

    # Carga de configuración desde config.py (y overrides para pruebas)
    app.config.from_object('config.Config')
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    if not app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        app.config.setdefault('SQLALCHEMY_ENGINE_OPTIONS', app.config['DB_POOL_OPTIONS'])

    origenes = app.config.get('CORS_ORIGINS', '*')
    if origenes != '*':
        origenes = [o.strip() for o in origenes.split(',') if o.strip()]

    # Inicialización de extensiones con la aplicación
    try:
        db.init_app(app)
        migrate.init_app(app, db)
        login_manager.init_app(app)
        cors.init_app(app, origins=origenes)
    except Exception as e:
        logger.error(f"Error al inicializar extensiones: {e}")
        raise

    # Carga del usuario a partir del token Bearer
    from calendario import security  # noqa: F401

    # Registro de blueprints
    from calendario.routes.home import bp as home_bp
    app.register_blueprint(home_bp)  # Health check
    from calendario.routes.auth import bp as auth_bp
    app.register_blueprint(auth_bp)  # Autenticación
    from calendario.routes.sedes import bp as sedes_bp
    app.register_blueprint(sedes_bp)
    from calendario.routes.service_entries import bp as service_entries_bp
    app.register_blueprint(service_entries_bp)
    from calendario.routes.quote_entries import bp as quote_entries_bp
    app.register_blueprint(quote_entries_bp)
    from calendario.routes.pending_items import bp as pending_items_bp
    app.register_blueprint(pending_items_bp)
    from calendario.routes.resources import bp as resources_bp
    app.register_blueprint(resources_bp)
    from calendario.routes.assignments import bp as assignments_bp
    app.register_blueprint(assignments_bp)
    from calendario.routes.quote_assignments import bp as quote_assignments_bp
    app.register_blueprint(quote_assignments_bp)

    from calendario.errors import registrar_manejadores
    registrar_manejadores(app)
    from calendario.commands import registrar_comandos
    registrar_comandos(app)

    # Importación de modelos dentro del contexto de la aplicación
    with app.app_context():
        try:
            from calendario.models.sedes import Sede
            from calendario.models.users import User
            from calendario.models.resources import Resource
            from calendario.models.service_entries import ServiceEntry
            from calendario.models.assignments import Assignment
            from calendario.models.quote_entries import QuoteEntry
            from calendario.models.quote_assignments import QuoteAssignment
            from calendario.models.pending_items import PendingItem
        except Exception as e:
            logger.error(f"Error al cargar modelos: {e}")
            raise
        _configurar_engine(db.engine, app.config.get('DB_SLOW_QUERY_THRESHOLD', 1.0))

    return app


def _configurar_engine(engine, umbral):
    if engine.dialect.name == 'sqlite':
        @event.listens_for(engine, 'connect')
        def activar_claves_foraneas(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    @event.listens_for(engine, 'before_cursor_execute')
    def antes_de_ejecutar(conn, _cursor, statement, _parameters, context, _executemany):
        conn.info.setdefault('query_start_time', []).append(time.time())

    @event.listens_for(engine, 'after_cursor_execute')
    def despues_de_ejecutar(conn, _cursor, statement, _parameters, context, _executemany):
        total = time.time() - conn.info['query_start_time'].pop(-1)
        if total > umbral:
            logger.warning(f"Consulta lenta ({total:.2f}s): {statement[:200]}...")
