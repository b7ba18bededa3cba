"""
Smoke tests — verify the package imports and the CLI entrypoint responds.
"""

from click.testing import CliRunner

from bndx import __version__
from bndx.main import cli


class TestBootstrap:
    def test_version_is_set(self):
        assert __version__
        assert isinstance(__version__, str)

    def test_cli_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_core_package_imports(self):
        import bndx.core.config.loader
        import bndx.core.models
        import bndx.core.observability.logging_config
        import bndx.core.services.catalog
        import bndx.core.services.descriptor
        import bndx.core.services.eclipse
        import bndx.core.use_cases.deps
        import bndx.core.use_cases.graph
        import bndx.core.use_cases.listing  # noqa: F401
