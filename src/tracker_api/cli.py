# cli.py
import json
import logging

import click

from tracker_api.config.settings import get_settings
from tracker_api.database.table_store import get_table_store
from tracker_api.services import read_table
from tracker_api.tables import ALL_TABLES

# Configure logging
logger = logging.getLogger(__name__)

@click.group()
def cli():
    """CLI commands for the Tracker API"""
    pass

@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  Deployment Mode: {settings.deployment_mode}")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    click.echo(f"  S3 Bucket: {settings.s3_bucket_name}")
    click.echo(f"  Media Folder: {settings.media_folder}")
    click.echo(f"  Database: {settings.database_path}")
    click.echo(f"  Meeting ID Prefix: {settings.meeting_id_prefix}")

@cli.command()
def init_tables():
    """Create the four record tables with their header rows"""
    settings = get_settings()
    store = get_table_store(settings.database_path)
    for spec in ALL_TABLES:
        store.ensure_table(spec.name, spec.header)
        click.echo(f"Ready: {spec.name}")

@cli.command()
@click.argument("name")
def dump_table(name):
    """Print every row of a table as JSON"""
    settings = get_settings()
    store = get_table_store(settings.database_path)
    click.echo(json.dumps(read_table(store, name), indent=2))

@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
def serve(host, port):
    """Run the API with uvicorn"""
    import uvicorn
    from tracker_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)

if __name__ == "__main__":
    cli()
