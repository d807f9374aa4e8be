"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from object_design_linter.infrastructure.config_file_loader import ConfigFileLoader
from object_design_linter.infrastructure.di.container import LinterContainer
from object_design_linter.interface.cli import CLIDependencies, create_app


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = LinterContainer()

    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        reporter=container.get_reporter(),
        filesystem=container.get_filesystem_gateway(),
        extractors=container.get_extractor_registry(),
        registry=container.get_rule_registry(),
        load_config=ConfigFileLoader.load_config_from_fs,
    )

    app = create_app(deps)
    app()


if __name__ == "__main__":
    main()
