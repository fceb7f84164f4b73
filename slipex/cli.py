"""
SlipEX CLI commands

This module provides command-line interface for SlipEX operations.
Input files hold already-extracted plain text; use - for stdin.
"""

import json
import os

import click
import yaml

from slipex.config.slipex_config import SlipEXConfig
from slipex.models.tax_document import DocumentType, UnsupportedDocumentTypeError, resolve_document_type
from slipex.processors.tax.classifier import DocumentClassifier
from slipex.processors.tax.extractor import FieldExtractor
from slipex.processors.tax.validator import DocumentValidator
from slipex.processors.tax.pipeline import DocumentPipeline

TYPE_CHOICES = [doc_type.value for doc_type in DocumentType]


def _emit(data, output_format):
    if output_format == 'json':
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())


def _hint(stream):
    name = getattr(stream, 'name', '')
    if not isinstance(name, str) or name == '<stdin>':
        return ''
    return os.path.basename(name)


@click.group()
@click.option('--config', 'config_path', type=click.Path(exists=True), help='Path to configuration file')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']), help='Logging level')
@click.option('--format', 'output_format', type=click.Choice(['yaml', 'json']), default='yaml', help='Output format')
@click.pass_context
def cli(ctx, config_path, log_level, output_format):
    """SlipEX command-line interface"""
    config = SlipEXConfig.from_file(config_path) if config_path else SlipEXConfig()
    config.configure_logging(log_level)
    ctx.obj = {'format': output_format}


@cli.command()
def types():
    """List supported document types"""
    for doc_type in DocumentType:
        click.echo(doc_type.value)


@cli.command()
@click.argument('file', type=click.File('r', encoding='utf-8'))
@click.option('--filename', help='Filename hint (defaults to the input file name)')
@click.pass_context
def classify(ctx, file, filename):
    """Classify a text file"""
    result = DocumentClassifier().classify(file.read(), filename or _hint(file))
    _emit(result.model_dump(mode='json'), ctx.obj['format'])


@cli.command()
@click.argument('file', type=click.File('r', encoding='utf-8'))
@click.option('--type', 'doc_type', type=click.Choice(TYPE_CHOICES), help='Document type (classified when omitted)')
@click.pass_context
def extract(ctx, file, doc_type):
    """Extract fields from a text file"""
    text = file.read()
    if doc_type is None:
        doc_type = DocumentClassifier().classify(text, _hint(file)).document_type
    fields = FieldExtractor().extract(text, doc_type)
    _emit({'document_type': fields.document_type.value, 'fields': fields.to_dict()}, ctx.obj['format'])


@cli.command()
@click.argument('fields_file', type=click.File('r', encoding='utf-8'))
@click.option('--type', 'doc_type', type=click.Choice(TYPE_CHOICES), required=True, help='Document type')
@click.pass_context
def validate(ctx, fields_file, doc_type):
    """Validate a YAML or JSON mapping of extracted fields"""
    try:
        data = yaml.safe_load(fields_file.read()) or {}
    except yaml.YAMLError as e:
        click.echo(f'Error: Could not parse fields file: {e}', err=True)
        raise click.Abort()

    # Accept the output of `slipex extract` as well as a bare mapping
    if isinstance(data, dict) and isinstance(data.get('fields'), dict):
        data = data['fields']
    if not isinstance(data, dict):
        click.echo('Error: Fields file must contain a mapping', err=True)
        raise click.Abort()

    try:
        result = DocumentValidator().validate(data, resolve_document_type(doc_type))
    except UnsupportedDocumentTypeError as e:
        click.echo(f'Error: {e}', err=True)
        raise click.Abort()

    _emit(result.model_dump(mode='json'), ctx.obj['format'])
    if not result.is_valid:
        ctx.exit(1)


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.File('r', encoding='utf-8'))
@click.option('--workers', default=4, show_default=True, type=click.IntRange(min=1), help='Worker threads')
@click.pass_context
def process(ctx, files, workers):
    """Classify, extract and validate one or more text files"""
    documents = [(_hint(f) or None, f.read()) for f in files]
    results = DocumentPipeline().process_batch(documents, max_workers=workers)

    summaries = [result.summary() for result in results]
    _emit(summaries[0] if len(summaries) == 1 else summaries, ctx.obj['format'])

    if any(not result.success for result in results):
        ctx.exit(1)


if __name__ == '__main__':
    cli()
