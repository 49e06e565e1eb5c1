"""Unit tests for the scaffolder."""

from conftest import FakeToolchain

from restructure.migration import Scaffolder
from restructure.models.results import Outcome


class TestScaffolder:

    def test_creates_and_registers_every_project(self, make_context, plan):
        toolchain = FakeToolchain(plan.manifest)
        scaffolder = Scaffolder(make_context(toolchain=toolchain), plan)

        results = scaffolder.scaffold()

        assert all(r.outcome == Outcome.SUCCESS for r in results)
        assert scaffolder.created == [p.name for p in plan.projects]
        assert [call[1] for call in toolchain.calls_to("create_project")] == [p.name for p in plan.projects]
        assert toolchain.calls_to("add_to_manifest") == [(p.project_file,) for p in plan.projects]
        for spec in plan.projects:
            assert spec.project_file.exists()

    def test_partial_failure_keeps_going(self, make_context, plan):
        toolchain = FakeToolchain(plan.manifest, fail_projects={"Accounting.Domain"})
        scaffolder = Scaffolder(make_context(toolchain=toolchain), plan)

        results = scaffolder.scaffold()

        assert scaffolder.failed == ["Accounting.Domain"]
        assert len(scaffolder.created) == 4
        assert not any(r.is_fatal for r in results)
        assert [r.outcome for r in results].count(Outcome.WARNING) == 1
        # Registration only for projects that were created
        registered = [call[0] for call in toolchain.calls_to("add_to_manifest")]
        assert plan.project("Accounting.Domain").project_file not in registered

    def test_existing_project_is_skipped(self, make_context, plan):
        domain = plan.project("Accounting.Domain")
        domain.path.mkdir(parents=True)
        domain.project_file.write_text("<Project />")
        toolchain = FakeToolchain(plan.manifest)

        scaffolder = Scaffolder(make_context(toolchain=toolchain), plan)
        scaffolder.scaffold()

        assert "Accounting.Domain" not in scaffolder.created
        assert "Accounting.Domain" not in [call[1] for call in toolchain.calls_to("create_project")]
        assert domain.project_file.read_text() == "<Project />"

    def test_registration_failure_is_warning(self, make_context, plan):
        toolchain = FakeToolchain(plan.manifest, failures={"add_to_manifest": 1})
        results = Scaffolder(make_context(toolchain=toolchain), plan).scaffold()

        registration = [r for r in results if "manually" in r.detail]
        assert len(registration) == len(plan.projects)
        assert all(r.outcome == Outcome.WARNING for r in registration)
