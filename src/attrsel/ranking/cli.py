"""Typer CLI for attribute ranking."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import polars as pl
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from attrsel.ranking.config import EvaluatorConfig
from attrsel.ranking.dataset import from_polars
from attrsel.ranking.discretize import KBinsAttributeDiscretizer
from attrsel.ranking.evaluators import get_evaluator, list_evaluators
from attrsel.ranking.exceptions import RankingError

app = typer.Typer(help="attrsel-ranking CLI")
console = Console()


@app.command("rank")
def rank(
    data_path: Path = typer.Argument(..., help="CSV or Parquet file, one row per instance"),
    class_column: str = typer.Option(..., "--class-column", "-c", help="Nominal class column"),
    weight_column: Optional[str] = typer.Option(None, "--weight-column", "-w", help="Instance weight column"),
    evaluator: str = typer.Option("va", "--evaluator", "-e", help="l2|va|chi_squared|info_gain"),
    formula: str = typer.Option("max_normalize", help="Va formula: max_normalize|euclidean_normalize_twice"),
    merge_missing: bool = typer.Option(True, "--merge-missing/--no-merge-missing", help="Redistribute missing values"),
    binarize: bool = typer.Option(False, "--binarize", help="Binarize numeric columns (zero vs non-zero)"),
    bins: Optional[int] = typer.Option(None, "--bins", help="Discretize numeric columns into N quantile bins"),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", help="Show only the K best attributes"),
    output: Optional[Path] = typer.Option(None, help="Write the full result as JSON"),
) -> None:
    """Rank attributes of a dataset against its class column."""
    df = _load_frame(data_path)
    try:
        config = EvaluatorConfig(
            merge_missing=merge_missing,
            binarize_numeric=binarize,
            formula=formula,
        )
        discretizer = KBinsAttributeDiscretizer(n_bins=bins) if bins else None
        dataset = from_polars(df, class_column, weight_column=weight_column, name=data_path.stem)
        result = get_evaluator(evaluator, config=config, discretizer=discretizer).build(dataset)
    except (RankingError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    ranked = result.to_frame()
    if top_k is not None:
        ranked = ranked.head(top_k)

    table = Table(title=f"{evaluator} ranking: {data_path.name}")
    table.add_column("Rank", style="cyan", justify="right")
    table.add_column("Attribute", style="green")
    table.add_column("Score", justify="right")
    for row in ranked.iter_rows(named=True):
        table.add_row(str(row["rank"]), row["attribute"], f"{row['score']:.6f}")
    console.print(table)

    if output:
        output.write_text(json.dumps(result.to_dict(), indent=2))
        console.print(f"[green]Wrote result to {output}[/green]")


@app.command("evaluators")
def evaluators() -> None:
    """List available evaluators."""
    table = Table(title="Evaluators")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="green")
    table.add_column("Statistics")
    for item in list_evaluators():
        table.add_row(item["name"], item["title"], ", ".join(item["statistics"]))
    console.print(table)


def _load_frame(path: Path) -> pl.DataFrame:
    if path.suffix.lower() == ".parquet":
        return pl.read_parquet(path)
    if path.suffix.lower() == ".csv":
        return pl.read_csv(path)
    raise typer.BadParameter("Unsupported file type; use Parquet or CSV")


if __name__ == "__main__":
    app()
