"""Pipeline orchestrator that runs one curation pass."""

import json
import time
from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .. import __version__
from ..config import Config
from ..models import Candidate, CurationResult, HealthReport
from ..preferences import PreferencesUnavailable, PreferenceStore
from ..providers import CurationProvider
from ..ranking import dedupe
from ..utils import utc_now
from .archive import CuratedArchive

console = Console()


class CurationError(Exception):
    """A curation run could not produce a selection."""


class NoArticlesAvailable(CurationError):
    """No candidates were supplied."""


class NoArticlesSelected(CurationError):
    """Curation left nothing to publish."""


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


class CurationPipeline:
    """Dedupes candidates, runs the provider and archives the selection."""

    def __init__(
        self,
        config: Config,
        store: PreferenceStore,
        provider: CurationProvider,
        archive: Optional[CuratedArchive] = None,
    ):
        self.config = config
        self.store = store
        self.provider = provider
        self.archive = archive or CuratedArchive(config.archive_path)
        self.stages = self._build_stages()
        self.total_start_time: Optional[float] = None

    def _build_stages(self) -> List[PipelineStage]:
        return [
            PipelineStage("dedupe", "Removing duplicate stories"),
            PipelineStage("curate", f"Curating with {self.provider.name}"),
            PipelineStage("archive", "Archiving selection"),
        ]

    def run(self, candidates: Sequence[Candidate], max_articles: Optional[int] = None) -> CurationResult:
        """
        Run the complete pipeline.

        Raises:
            NoArticlesAvailable: If no candidates were supplied
            NoArticlesSelected: If curation selected nothing
            PreferencesUnavailable: If preferences cannot be loaded
        """
        self.stages = self._build_stages()
        self.total_start_time = time.time()
        if max_articles is None:
            max_articles = self.config.config.curation.max_articles

        console.print(Panel.fit(
            f"Daily Curator Pipeline\n"
            f"Provider: {self.provider.name} • Candidates: {len(candidates)} • Max articles: {max_articles}",
            style="bold blue"
        ))

        try:
            if not candidates:
                self.stages[0].fail("No candidates supplied")
                raise NoArticlesAvailable("No candidate articles to curate")

            preferences = self.store.load()
            return self._execute_pipeline(candidates, preferences, max_articles)
        finally:
            self._save_stage_stats()
            self._print_summary()

    def health_check(self) -> HealthReport:
        """
        Check that a run could proceed.

        The provider must be within budget, preferences must load, and the
        configured article count must be positive.
        """
        console.print("🔍 Running health check...")
        checks = {"provider": True, "preferences": True, "configuration": True}
        problems = {}

        if not self.provider.is_within_budget():
            checks["provider"] = False
            problems["provider"] = f"{self.provider.name} monthly budget exhausted"

        try:
            self.store.load()
        except PreferencesUnavailable as e:
            checks["preferences"] = False
            problems["preferences"] = str(e)

        max_articles = self.config.config.curation.max_articles
        if max_articles <= 0:
            checks["configuration"] = False
            problems["configuration"] = f"max_articles must be positive, got {max_articles}"

        status = "healthy" if all(checks.values()) else "unhealthy"
        console.print(f"Health check completed: {status}")

        return HealthReport(
            status=status,
            checks=checks,
            problems=problems,
            provider_name=self.provider.name,
            cost_per_month=self.provider.cost_per_month,
            effectiveness=self.provider.effectiveness,
            features=list(self.provider.features),
            usage=self.provider.get_usage_stats(),
            checked_at=utc_now(),
            version=__version__,
        )

    def _execute_pipeline(self, candidates, preferences, max_articles: int) -> CurationResult:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:

            stage = self.stages[0]
            task = progress.add_task(stage.description, total=1)
            stage.start()
            unique: List[Candidate] = dedupe(candidates)
            stage.complete({
                "total": len(candidates),
                "unique": len(unique),
                "duplicates": len(candidates) - len(unique),
            })
            progress.advance(task, 1)

            stage = self.stages[1]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()
            result = self.provider.curate(unique, preferences, max_articles)
            if not result.articles:
                stage.fail("No articles selected")
                raise NoArticlesSelected("Curation did not select any articles")
            stage.complete({
                "selected": len(result.articles),
                "average_score": result.quality_metrics.average_score,
                "method": result.curation_method,
                "used_fallback": result.used_fallback,
            })
            progress.advance(task, 1)

            stage = self.stages[2]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()
            try:
                path = self.archive.save(result)
            except OSError as e:
                stage.fail(str(e))
                raise
            stage.complete({"path": str(path)})
            progress.advance(task, 1)

        return result

    def _save_stage_stats(self):
        """Save pipeline stage statistics and provider usage; failures only warn."""
        stats = {
            "pipeline": {
                "total_duration": time.time() - self.total_start_time if self.total_start_time else 0,
                "completed_at": utc_now().isoformat(),
                "provider": self.provider.name,
            },
            "usage": self.provider.get_usage_stats().model_dump(),
            "stages": {},
        }

        for stage in self.stages:
            stats["stages"][stage.name] = {
                "duration": stage.duration,
                "success": stage.success,
                "error": stage.error,
                "stats": stage.stats,
            }

        try:
            with open(self.config.results_dir / "pipeline_stats.json", "w") as f:
                json.dump(stats, f, indent=2)
        except OSError as e:
            console.print(f"[yellow]Could not save pipeline stats: {e}[/yellow]")

    def _print_summary(self):
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Pipeline Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            if stage.success:
                status = "[green]✓[/green]"
            elif stage.error:
                status = "[red]✗[/red]"
            else:
                status = "[dim]-[/dim]"
            duration = f"{stage.duration:.2f}s" if stage.duration > 0 else "-"

            details = ""
            if stage.success:
                if stage.name == "dedupe":
                    details = f"{stage.stats.get('unique', 0)} unique, {stage.stats.get('duplicates', 0)} duplicates"
                elif stage.name == "curate":
                    details = f"{stage.stats.get('selected', 0)} selected, avg {stage.stats.get('average_score', 0):.1f}"
                    if stage.stats.get("used_fallback"):
                        details += " (fallback)"
                elif stage.name == "archive":
                    details = stage.stats.get("path", "")
            elif stage.error:
                details = stage.error

            table.add_row(stage.name.title(), status, duration, details)

        console.print("\n")
        console.print(table)

        if all(s.success for s in self.stages):
            console.print(Panel(
                f"[green]Pipeline completed successfully![/green]\n\n"
                f"Duration: {total_duration:.1f} seconds\n"
                f"Results directory: {self.config.results_dir}",
                style="green"
            ))
        else:
            failed_stages = [s.name for s in self.stages if s.error]
            console.print(Panel(
                f"[red]Pipeline failed![/red]\n\n"
                f"Failed stages: {', '.join(failed_stages) or 'none'}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="red"
            ))
