import logging

import click
from sqlalchemy import text

from calendario import db

logger = logging.getLogger(__name__)


def registrar_comandos(app):
    @app.cli.command('init-db')
    def init_db():
        """Crea las tablas que aún no existen."""
        db.create_all()
        click.echo('Tablas creadas')

    @app.cli.command('check-db')
    def check_db():
        """Comprueba la conexión a la base de datos."""
        try:
            ahora = db.session.execute(text('SELECT CURRENT_TIMESTAMP')).scalar()
        except Exception as e:
            logger.error(f"Error conectando a la base de datos: {e}")
            raise click.ClickException('No se pudo conectar a la base de datos') from e
        click.echo(f"Conexión a la base de datos correcta: {ahora}")
