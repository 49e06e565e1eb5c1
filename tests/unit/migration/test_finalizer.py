"""Unit tests for the finalizer."""

from conftest import FakeToolchain

from restructure.migration import Finalizer
from restructure.migration.finalizer import NEXT_STEPS
from restructure.models.results import (
    MigrationReport,
    PhaseResult,
    PipelineState,
    StageResult,
)


class TestFinalizer:

    def test_declined_keeps_legacy_registration(self, make_context, plan):
        toolchain = FakeToolchain(plan.manifest)
        results = Finalizer(make_context(toolchain=toolchain, answers=False), plan).finalize()

        assert toolchain.calls_to("remove_from_manifest") == []
        assert not results[0].is_fatal
        assert plan.legacy_dir.exists()

    def test_accepted_removes_legacy_registration_only(self, make_context, plan):
        toolchain = FakeToolchain(plan.manifest)
        Finalizer(make_context(toolchain=toolchain), plan).finalize()

        assert toolchain.calls_to("remove_from_manifest") == [(plan.legacy_project_file,)]
        assert plan.legacy_dir.exists()

    def test_summary_lists_problems_and_next_steps(self, make_context, plan, output):
        report = MigrationReport(
            results=[StageResult.warning("wire", "Failed to add reference X -> Y")],
            phases=[PhaseResult("restore", passed=True, exit_code=0)],
            created_projects=["Accounting.Api"],
            state=PipelineState.COMPLETED,
        )

        Finalizer(make_context(), plan).render_summary(report)

        text = output.getvalue()
        assert "Migration completed" in text
        assert "Accounting.Api" in text
        assert "Failed to add reference X -> Y" in text
        assert "restore" in text
        for step in NEXT_STEPS:
            assert step in text
