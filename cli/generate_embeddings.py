# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-16
# Description: generate_embeddings.py
# -----------------------------------------------------------------------------
"""
Offline job: corpus CSV -> text_map.bin + embeddings.bin

    dense-embed data/arxiv_data.csv
    dense-embed data/arxiv_data.csv --column titles --batch-size 16
"""
from typing import Optional

import click

from config.Config import Config
from corpus.CorpusLoader import CorpusLoader
from embedding.EmbeddingGenerator import EmbeddingGenerator
from embedding.ModelFactory import load_embedding_model
from errors.DenseSearchErrors import DenseSearchError
from utility.logging_utils import attach_file_log, detach_file_log, get_logger

logger = get_logger("cli.generate_embeddings")


def _parse_column(value: str):
    """A purely numeric selector is a 0-based position, anything else a header name."""
    return int(value) if value.isdigit() else value


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("file_name", required=False)
@click.option("--column", default="0", show_default=True, help="Column position (0-based) or header name.")
@click.option("--max-rows", type=int, default=None, help="Cap on source rows [env DENSE_MAX_ROWS].")
@click.option("--batch-size", type=int, default=None, help="Texts per embed_batch call [env DENSE_BATCH_SIZE].")
@click.option("--parallelism", type=int, default=None, help="Concurrent batches [env DENSE_PARALLELISM].")
@click.option("--out-dir", default=None, help="Artifacts directory [env DENSE_ARTIFACTS_DIR].")
@click.option("--text-map-name", default=None, help="Text map file name [env DENSE_TEXT_MAP_NAME].")
@click.option("--embeddings-name", default=None, help="Embeddings file name [env DENSE_EMBEDDINGS_NAME].")
@click.option("--key", "embeddings_key", default=None, help="Tensor key [env DENSE_EMBEDDINGS_KEY].")
@click.option("--log-file", envvar="DENSE_LOG_FILE", default=None, help="Also write the run's log to this file.")
@click.pass_context
def main(
        ctx: click.Context,
        file_name: Optional[str],
        column: str,
        max_rows: Optional[int],
        batch_size: Optional[int],
        parallelism: Optional[int],
        out_dir: Optional[str],
        text_map_name: Optional[str],
        embeddings_name: Optional[str],
        embeddings_key: Optional[str],
        log_file: Optional[str],
):
    if not file_name:
        click.echo("Usage: dense-embed <file_name>", err=True)
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)

    file_log = attach_file_log(log_file) if log_file else None
    try:
        _generate(
            ctx,
            file_name,
            column,
            max_rows=max_rows,
            batch_size=batch_size,
            parallelism=parallelism,
            artifacts_dir=out_dir,
            text_map_name=text_map_name,
            embeddings_name=embeddings_name,
            embeddings_key=embeddings_key,
        )
    finally:
        if file_log is not None:
            detach_file_log(file_log)


def _generate(ctx: click.Context, file_name: str, column: str, **overrides) -> None:
    try:
        cfg = Config.from_env().with_overrides(**overrides)
    except (ValueError, RuntimeError) as e:
        logger.error("Invalid configuration: %s", e)
        ctx.exit(1)

    logger.info("Starting to generate embeddings from file %s", file_name)
    logger.info("Config: %r", cfg.summary())

    try:
        sentences = CorpusLoader(max_rows=cfg.max_rows).load(file_name, column=_parse_column(column))
        model = load_embedding_model(cfg)
        generator = EmbeddingGenerator(model, batch_size=cfg.batch_size, parallelism=cfg.parallelism)
        result = generator.run(
            sentences,
            text_map_path=cfg.text_map_path,
            matrix_path=cfg.embeddings_path,
            key=cfg.embeddings_key,
        )
    except DenseSearchError as e:
        logger.error("Embedding generation failed: %s", e)
        ctx.exit(1)

    click.echo(
        f"{result.rows} embeddings (dim={result.dimension}) saved to {result.matrix_path}; "
        f"text map saved to {result.text_map_path}"
    )


if __name__ == "__main__":
    main()
