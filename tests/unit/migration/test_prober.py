"""Unit tests for the environment prober."""

from conftest import FakeToolchain, FakeVcs

from restructure.migration import EnvironmentProber
from restructure.models.results import Outcome


class TestEnvironmentProber:

    def test_all_present(self, make_context, plan):
        context = make_context(vcs=FakeVcs())
        result = EnvironmentProber(context, plan).probe()

        assert result.ok
        assert result.vcs_available
        assert result.missing_tools == []
        assert all(r.outcome == Outcome.SUCCESS for r in result.results)

    def test_missing_manifest_is_fatal_and_fails_fast(self, make_context, plan, legacy_repo):
        (legacy_repo / "AccountingSystem.sln").unlink()
        toolchain = FakeToolchain(plan.manifest)
        context = make_context(toolchain=toolchain, vcs=FakeVcs())

        result = EnvironmentProber(context, plan).probe()

        assert not result.ok
        assert any(r.is_fatal and "manifest" in r.detail for r in result.results)
        assert toolchain.calls == []

    def test_missing_legacy_directory_is_fatal(self, make_context, plan, legacy_repo):
        import shutil
        shutil.rmtree(legacy_repo / "AccountingSystem")

        result = EnvironmentProber(make_context(), plan).probe()

        assert not result.ok
        assert any(r.is_fatal and "Legacy project" in r.detail for r in result.results)

    def test_missing_build_toolchain_is_fatal(self, make_context, plan):
        toolchain = FakeToolchain(plan.manifest, failures={"version": 127})
        result = EnvironmentProber(make_context(toolchain=toolchain, vcs=FakeVcs()), plan).probe()

        assert not result.ok
        assert result.missing_tools == ["dotnet"]

    def test_missing_vcs_is_only_a_warning(self, make_context, plan):
        result = EnvironmentProber(make_context(vcs=FakeVcs(available=False)), plan).probe()

        assert result.ok
        assert not result.vcs_available
        assert result.missing_tools == ["git"]
        assert [r.outcome for r in result.results].count(Outcome.WARNING) == 1

    def test_no_vcs_configured(self, make_context, plan):
        result = EnvironmentProber(make_context(vcs=None), plan).probe()

        assert result.ok
        assert not result.vcs_available
