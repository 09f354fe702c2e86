import pytest

from bonanza.pipeline import ReportPipeline


@pytest.fixture
def run_report(make_config, output_dirs, write_csv):
    """Run the pipeline on the given capture rows; returns the ReportResult."""
    def _run(rows, **user_overrides):
        path = write_csv(rows)
        config = make_config(input_path=str(path), base_dir=str(output_dirs["base"]),
                             **user_overrides)
        return ReportPipeline(config, output_dirs, configure_logging=False).run()

    return _run
