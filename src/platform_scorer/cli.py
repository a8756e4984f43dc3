"""CLI for the AI Platform Scoring Engine.

Provides command-line interface for scoring assessments, inspecting the
benchmark tables and running the feedback-driven weight adjustment loop.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .app_logging import setup_logging
from .benchmarks import (
    AI_PLATFORMS,
    COMPLIANCE_DATA,
    INTEGRATION_SUPPORT,
    PAIN_POINT_SOLUTIONS,
    PLATFORM_PRICING,
    ROI_BENCHMARKS,
    platform_name,
    validate_benchmark_tables,
)
from .config import find_config_file, get_config, load_config
from .engine import (
    ScoringEngine,
    load_assessment,
    load_feedback,
    load_weights,
    validate_assessment,
)
from .feedback import FeedbackAnalyzer, WeightAdjuster
from .schema import AssessmentResult, BudgetFit, PlatformId, WeightOptimization

console = Console()

BUDGET_FIT_COLORS = {
    BudgetFit.EXCELLENT: "green",
    BudgetFit.GOOD: "cyan",
    BudgetFit.MODERATE: "yellow",
    BudgetFit.EXCEEDS: "red",
}


@click.group()
@click.version_option(version="1.0.0", prog_name="platform-scorer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to scorer-config.yaml (default: search standard locations)"
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level"
)
def main(config_path: Optional[str], log_level: str):
    """AI Platform Scoring and Recommendation Engine.

    Scores Google Gemini, Microsoft Copilot, Anthropic Claude and OpenAI
    ChatGPT against an organizational assessment and returns a ranked
    recommendation with clear reasoning.
    """
    setup_logging(level=log_level, dev_mode=True)

    path = Path(config_path) if config_path else find_config_file()
    if path:
        try:
            load_config(path)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)


@main.command("score")
@click.option(
    "--assessment", "-a",
    required=True,
    type=click.Path(exists=True),
    help="Path to assessment JSON/YAML file"
)
@click.option(
    "--weights", "-w",
    type=click.Path(exists=True),
    help="Refined weights file (overrides assessment and default weights)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show justification, pros/cons and best-for details"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def score_cmd(
    assessment: str,
    weights: Optional[str],
    out: Optional[str],
    verbose: bool,
    json_output: bool,
):
    """Rank the AI platforms for an assessment.

    Examples:
        platform-scorer score -a assessment.yaml
        platform-scorer score -a assessment.yaml -v
        platform-scorer score -a assessment.yaml -w refined-weights.yaml -j
    """
    try:
        engine = ScoringEngine(get_config())
        refined = load_weights(weights) if weights else None
        result = engine.score(assessment, refined_weights=refined)

        if json_output:
            output_json(result, out)
        else:
            display_result(result, verbose)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("roi")
@click.option(
    "--assessment", "-a",
    required=True,
    type=click.Path(exists=True),
    help="Path to assessment JSON/YAML file"
)
@click.option(
    "--platform", "-p",
    type=click.Choice([p.value for p in PlatformId]),
    help="Show the department breakdown for one platform"
)
def roi_cmd(assessment: str, platform: Optional[str]):
    """Show annual savings, cost and ROI per platform."""
    try:
        engine = ScoringEngine(get_config())
        data = load_assessment(assessment)
        results = engine.roi_calculator.calculate_all(data.departments)

        table = Table(title="ROI by Platform", show_header=True, header_style="bold")
        table.add_column("Platform", style="cyan")
        table.add_column("Savings", justify="right")
        table.add_column("Cost", justify="right")
        table.add_column("Net", justify="right")
        table.add_column("1-Yr ROI", justify="right")
        table.add_column("3-Yr ROI", justify="right")

        for r in results:
            table.add_row(
                platform_name(r.platform),
                f"${r.total_annual_savings:,.0f}",
                f"${r.total_cost:,.0f}",
                f"${r.net_annual_savings:,.0f}",
                f"{r.one_year_roi_pct:.0f}%",
                f"{r.three_year_roi_pct:.0f}%",
            )
        console.print(table)

        if platform:
            selected = next(r for r in results if r.platform == platform)
            detail = Table(title=f"{platform_name(platform)} by Department", header_style="bold")
            detail.add_column("Department")
            detail.add_column("Users", justify="right")
            detail.add_column("Hrs/User/Wk", justify="right")
            detail.add_column("Savings", justify="right")
            detail.add_column("Cost", justify="right")
            detail.add_column("Net", justify="right")
            for row in selected.department_breakdown:
                detail.add_row(
                    row.department,
                    str(row.user_count),
                    f"{row.hours_saved_per_user_per_week:.1f}",
                    f"${row.annual_savings:,.0f}",
                    f"${row.platform_cost:,.0f}",
                    f"${row.net_savings:,.0f}",
                )
            console.print(detail)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("summary")
@click.option(
    "--assessment", "-a",
    required=True,
    type=click.Path(exists=True),
    help="Path to assessment JSON/YAML file"
)
@click.option(
    "--weights", "-w",
    type=click.Path(exists=True),
    help="Refined weights file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Write the Markdown summary to this file (default: stdout)"
)
def summary_cmd(assessment: str, weights: Optional[str], out: Optional[str]):
    """Generate a Markdown executive summary for an assessment."""
    try:
        engine = ScoringEngine(get_config())
        refined = load_weights(weights) if weights else None
        markdown = engine.executive_summary(assessment, refined_weights=refined)

        if out:
            with open(out, "w", encoding="utf-8") as f:
                f.write(markdown)
            console.print(f"[green]✓ Executive summary written to {out}[/green]")
        else:
            click.echo(markdown)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("benchmarks")
@click.option(
    "--table", "-t",
    "table_name",
    default="roi",
    type=click.Choice(["roi", "pricing", "compliance", "integrations", "pain-points"]),
    help="Benchmark table to show"
)
def benchmarks_cmd(table_name: str):
    """Inspect the static benchmark tables."""
    platform_ids = [p.id.value for p in AI_PLATFORMS]
    table = Table(show_header=True, header_style="bold")

    if table_name == "pricing":
        table.title = "Monthly Price per User"
        table.add_column("Platform", style="cyan")
        table.add_column("Price", justify="right")
        for p in AI_PLATFORMS:
            table.add_row(p.display_name, f"${PLATFORM_PRICING.get(p.id.value, 0):,.2f}")

    elif table_name == "pain-points":
        table.title = "Pain Point Solutions"
        table.add_column("Pain Point", style="cyan")
        table.add_column("Solution")
        table.add_column("Platforms (best first)")
        for pain_point, solution in PAIN_POINT_SOLUTIONS.items():
            table.add_row(
                pain_point,
                solution.solution,
                ", ".join(platform_name(pid) for pid in solution.platforms),
            )

    else:
        if table_name == "roi":
            table.title = "Hours Saved per User per Week"
            rows = ROI_BENCHMARKS
            label = "Department"
        elif table_name == "compliance":
            table.title = "Compliance Certification Status"
            rows = _transpose(COMPLIANCE_DATA)
            label = "Standard"
        else:
            table.title = "Integration Support Tier"
            rows = _transpose(INTEGRATION_SUPPORT)
            label = "Tool"

        table.add_column(label, style="cyan")
        for pid in platform_ids:
            table.add_column(platform_name(pid))
        for key, by_platform in rows.items():
            table.add_row(key, *[str(by_platform.get(pid, "-")) for pid in platform_ids])

    console.print(table)


def _transpose(table: dict[str, dict[str, str]]) -> dict[str, dict[str, str]]:
    """Turn platform -> key -> value into key -> platform -> value."""
    rows: dict[str, dict[str, str]] = {}
    for pid, by_key in table.items():
        for key, value in by_key.items():
            rows.setdefault(key, {})[pid] = value
    return rows


@main.command("validate")
@click.option(
    "--assessment", "-a",
    type=click.Path(),
    help="Path to assessment JSON/YAML file"
)
@click.option(
    "--benchmarks", "-b",
    "check_benchmarks",
    is_flag=True,
    help="Check integrity of the static benchmark tables"
)
def validate_cmd(assessment: Optional[str], check_benchmarks: bool):
    """Validate an assessment file and/or the benchmark tables.

    Examples:
        platform-scorer validate -a assessment.yaml
        platform-scorer validate --benchmarks
    """
    if not assessment and not check_benchmarks:
        console.print("[yellow]Please specify --assessment and/or --benchmarks to validate[/yellow]")
        return

    all_valid = True

    if assessment:
        is_valid, issues = validate_assessment(assessment)
        if is_valid:
            console.print(f"[green]✓ Assessment valid: {assessment}[/green]")
            for issue in issues:
                console.print(f"  [yellow]- {issue}[/yellow]")
        else:
            console.print(f"[red]✗ Assessment invalid: {assessment}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    if check_benchmarks:
        issues = validate_benchmark_tables()
        if issues:
            console.print("[red]✗ Benchmark tables inconsistent[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False
        else:
            console.print("[green]✓ Benchmark tables consistent[/green]")

    sys.exit(0 if all_valid else 1)


@main.command("analyze-feedback")
@click.option(
    "--feedback", "-f",
    required=True,
    type=click.Path(exists=True),
    help="Path to feedback history JSON/YAML file"
)
def analyze_feedback_cmd(feedback: str):
    """Show per-platform feedback statistics and detected patterns."""
    try:
        history = load_feedback(feedback)
        analysis = FeedbackAnalyzer(get_config().feedback).analyze(history)

        if analysis is None:
            console.print(
                f"[yellow]Not enough feedback for analysis ({len(history)} records, "
                f"{get_config().feedback.min_samples_for_patterns} required)[/yellow]"
            )
            return

        table = Table(
            title=f"Feedback by Platform ({analysis.total_feedback_count} records)",
            header_style="bold",
        )
        table.add_column("Platform", style="cyan")
        table.add_column("Total", justify="right")
        table.add_column("Good Fit", justify="right")
        table.add_column("Poor Fit", justify="right")
        table.add_column("Missing Feature", justify="right")
        table.add_column("Avg Rating", justify="right")
        table.add_column("Accuracy", justify="right")

        for pid, stats in analysis.platform_feedback.items():
            table.add_row(
                platform_name(pid),
                str(stats.total),
                str(stats.good_fit),
                str(stats.poor_fit),
                str(stats.missing_feature),
                f"{stats.avg_rating:.1f}",
                f"{stats.accuracy_rate:.0%}",
            )
        console.print(table)

        if analysis.patterns:
            console.print("\n[bold]Patterns:[/bold]")
            for p in analysis.patterns:
                color = "red" if p.severity.value == "high" else "yellow"
                console.print(
                    f"  [{color}]•[/{color}] {p.pattern_type.value} - "
                    f"{platform_name(p.platform_id)}: {p.recommendation}"
                )
        else:
            console.print("\n[green]No patterns detected[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("adjust-weights")
@click.option(
    "--feedback", "-f",
    required=True,
    type=click.Path(exists=True),
    help="Path to feedback history JSON/YAML file"
)
@click.option(
    "--weights", "-w",
    type=click.Path(exists=True),
    help="Current weights file (default: configured scoring weights)"
)
@click.option(
    "--model", "-m",
    help="pydantic-ai model for the weight advisor (e.g. openai:gpt-4o)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Write the resulting weights to this YAML file"
)
def adjust_weights_cmd(
    feedback: str,
    weights: Optional[str],
    model: Optional[str],
    out: Optional[str],
):
    """Propose refined scoring weights from feedback history.

    Weights are only changed when an advisor is available (via --model or
    advisor.enabled in the config) and its proposal sums to 1.0.
    """
    try:
        cfg = get_config()
        history = load_feedback(feedback)
        current = load_weights(weights) if weights else cfg.scoring_weights.to_weights()

        advisor = None
        model_name = model or (cfg.advisor.model if cfg.advisor.enabled else None)
        if model_name:
            from .advisor import PydanticAIWeightAdvisor
            advisor = PydanticAIWeightAdvisor(model_name, cfg.feedback.max_adjustment_pct)

        with console.status("Evaluating feedback..."):
            optimization = asyncio.run(WeightAdjuster(advisor, cfg.feedback).optimize(history, current))

        display_optimization(optimization)

        if out:
            save_weights(optimization, Path(out))
            console.print(f"\n[green]Weights saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="scorer-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default scorer configuration file.

    Example:
        platform-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • scoring_weights - Default weight of each scoring component")
        console.print("  • budget_fit - Cost-to-budget ratios for each budget-fit class")
        console.print("  • feedback - Sample sizes and thresholds for the feedback loop")
        console.print("  • advisor - LLM model used to propose refined weights")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. PLATFORM_SCORER_CONFIG environment variable")
        console.print("  2. ./scorer-config.yaml (current directory)")
        console.print("  3. ~/.config/platform-scorer/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def display_result(result: AssessmentResult, verbose: bool):
    """Display an assessment result in formatted text."""
    summary = result.summary

    console.print(Panel(
        f"[bold]{result.organization_name}[/bold]\n\n"
        f"Users evaluated: {summary.total_users}\n"
        f"Weights: {result.weight_source.value}",
        title="Platform Assessment",
    ))
    console.print(
        f"\nTop recommendation: [bold cyan]{summary.primary_platform_name or 'None'}[/bold cyan]"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Platform", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("ROI", justify="right")
    table.add_column("Compliance", justify="right")
    table.add_column("Integration", justify="right")
    table.add_column("Pain Points", justify="right")
    table.add_column("Budget")

    for i, rec in enumerate(result.recommendations, 1):
        color = BUDGET_FIT_COLORS.get(rec.budget_fit, "white")
        table.add_row(
            str(i),
            rec.platform_name,
            f"{rec.total_score:.1f}",
            f"{rec.one_year_roi_pct:.0f}%",
            f"{rec.compliance_score:.0f}%",
            f"{rec.integration_score:.0f}%",
            f"{rec.pain_point_score:.0f}%",
            f"[{color}]{rec.budget_fit.value}[/{color}]",
        )
    console.print(table)

    if summary.key_drivers:
        console.print("\n[bold]Key Drivers:[/bold]")
        for driver in summary.key_drivers:
            console.print(f"  [green]•[/green] {driver}")

    if summary.key_risks:
        console.print("\n[bold]Key Risks:[/bold]")
        for risk in summary.key_risks:
            console.print(f"  [yellow]•[/yellow] {risk}")

    if verbose:
        console.print()
        for rec in result.recommendations:
            console.print(f"[bold cyan]{rec.platform_name}[/bold cyan]")
            console.print(f"  {rec.justification_text}")
            console.print(f"  [green]Pros:[/green] {'; '.join(rec.pros)}")
            console.print(f"  [yellow]Cons:[/yellow] {'; '.join(rec.cons)}")
            if rec.best_for:
                console.print(f"  [blue]Best for:[/blue] {', '.join(rec.best_for)}")
            console.print()

    if result.processing_warnings:
        console.print("\n[dim]Warnings:[/dim]")
        for warning in result.processing_warnings:
            console.print(f"  [dim]• {warning}[/dim]")


def display_optimization(optimization: WeightOptimization):
    """Display the outcome of a weight adjustment attempt."""
    status = "[green]applied[/green]" if optimization.applied else "[yellow]not applied[/yellow]"
    console.print(f"\nWeight optimization {status}: {optimization.message}")
    console.print(f"Feedback records: {optimization.sample_size}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Weight", style="cyan")
    table.add_column("Previous", justify="right")
    table.add_column("Result", justify="right")
    for name in ("roi_weight", "compliance_weight", "integration_weight", "pain_point_weight"):
        table.add_row(
            name,
            f"{getattr(optimization.previous_weights, name):.2f}",
            f"{getattr(optimization.weights, name):.2f}",
        )
    console.print(table)

    for adj in optimization.adjustments:
        console.print(f"  • {adj.weight_name}: {adj.reasoning}")
    for rec in optimization.recommendations:
        console.print(f"  [dim]• {rec}[/dim]")


def save_weights(optimization: WeightOptimization, path: Path):
    """Write weights in the format accepted by --weights."""
    data = {
        "weights": optimization.weights.model_dump(),
        "applied": optimization.applied,
        "sample_size": optimization.sample_size,
        "message": optimization.message,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def output_json(result: AssessmentResult, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
