"""
CLI interface for vectorization workflows using Click.
"""

import copy
import sys
from typing import Any, Dict, Optional

import click

from vectext import __version__
from vectext.exceptions import VectorizerError
from vectext.features.pipeline import create_feature_pipeline
from vectext.utils.config_loader import ConfigLoader


def get_config_loader(config_dir: str) -> ConfigLoader:
    """Helper to get initialized config loader."""
    loader = ConfigLoader(config_dir=config_dir)
    try:
        loader.load_all()
    except FileNotFoundError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"))
        sys.exit(1)
    return loader


def get_features_config(
    config_loader: ConfigLoader,
    vectorizer_type: Optional[str] = None,
    output: Optional[str] = None,
) -> Dict[str, Any]:
    """Features config with command line overrides applied."""
    features_config = copy.deepcopy(config_loader.get("features", {}))

    if vectorizer_type:
        features_config.setdefault("vectorizer", {})["type"] = vectorizer_type
    if output:
        features_config.setdefault("storage", {})["output_dir"] = output

    return features_config


@click.group()
@click.version_option(version=__version__)
def cli():
    """Turn text corpora into term-frequency and TF-IDF matrices."""
    pass


@cli.command()
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option("--config-dir", default="configs", show_default=True, help="Directory with *_config.yaml files")
@click.option("--type", "vectorizer_type", type=click.Choice(["count", "tfidf"]), help="Vectorizer type override")
@click.option("--output", type=click.Path(file_okay=False), help="Output directory override")
def vectorize(input, config_dir, vectorizer_type, output):
    """Fit a vectorizer on INPUT and save the feature matrix."""
    config_loader = get_config_loader(config_dir)
    features_config = get_features_config(config_loader, vectorizer_type, output)

    try:
        pipeline = create_feature_pipeline(features_config)
        matrix = pipeline.run(input)
    except (VectorizerError, ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"✗ Vectorization failed: {e}", fg="red"))
        sys.exit(1)

    click.echo(click.style("✓ Vectorization completed successfully!", fg="green"))
    click.echo(f"Shape: {click.style(str(matrix.shape), fg='cyan')}")
    click.echo(f"Output: {click.style(pipeline.context['output_dir'], fg='cyan')}")


@cli.command()
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option("--config-dir", default="configs", show_default=True, help="Directory with *_config.yaml files")
@click.option("--show-pruned", is_flag=True, help="Also list terms removed by pruning")
def vocabulary(input, config_dir, show_pruned):
    """Print the vocabulary learned from INPUT."""
    config_loader = get_config_loader(config_dir)
    features_config = get_features_config(config_loader)

    try:
        pipeline = create_feature_pipeline(features_config, save=False)
        pipeline.run(input)
    except (VectorizerError, ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"✗ Vectorization failed: {e}", fg="red"))
        sys.exit(1)

    vectorizer = pipeline.context["vectorizer"]
    click.echo(f"Vocabulary ({click.style(str(len(vectorizer.vocabulary)), fg='cyan')} terms):")
    for index, term in enumerate(vectorizer.feature_names):
        click.echo(f"  {index}\t{term}")

    if show_pruned:
        click.echo(f"\n{click.style('Pruned terms:', fg='yellow')}")
        for term in sorted(vectorizer.pruned_terms):
            click.echo(f"  {term}")


@cli.command()
@click.option("--config-dir", default="configs", show_default=True, help="Directory with *_config.yaml files")
@click.option("--type", "config_type", type=str, help="Config type to show")
def config(config_dir, config_type):
    """Display current configuration."""
    config_loader = get_config_loader(config_dir)

    click.echo(click.style("Current Configuration:", fg="yellow", bold=True))
    click.echo()

    if config_type:
        cfg = config_loader.get(config_type)
        click.echo(f"{click.style(config_type.upper() + ' Config:', fg='cyan')}")
        click.echo(cfg)
    else:
        for name, cfg in config_loader.configs.items():
            click.echo(f"{click.style(name.upper() + ' Config:', fg='cyan')}")
            click.echo(cfg)
            click.echo()


if __name__ == "__main__":
    cli()
