"""
Integration tests for the read -> simplify -> encode -> archive workflow
"""

import msgpack
import pytest
import zstandard as zstd
from click.testing import CliRunner

from trajpress.__main__ import cli
from trajpress.context.encoding import decode
from trajpress.context.io import load_plt_directory
from trajpress.context.simplification import simplify
from trajpress.errors import DecodingCorrupt, InvalidArgument
from trajpress.models import Variant
from trajpress.services import TrajectoryCompressor, build_report_table


class TestCompressionWorkflow:
    """Test end-to-end compression workflow"""

    def test_compress_reports_counts_and_sizes(self, sample_trajectory):
        compressor = TrajectoryCompressor(epsilon=0.0002)

        compressed, stats = compressor.compress(sample_trajectory)

        assert stats.original_points == len(sample_trajectory)
        assert 2 <= stats.simplified_points < stats.original_points
        assert stats.absolute_size == len(compressed.absolute)
        assert stats.delta_size == len(compressed.delta)
        assert stats.delta_size <= stats.absolute_size
        assert compressed.simplified_count == stats.simplified_points

    def test_buffers_decode_to_simplified_trajectory(self, sample_trajectory):
        compressor = TrajectoryCompressor(epsilon=0.0002)
        expected = simplify(sample_trajectory, 0.0002)

        compressed, _ = compressor.compress(sample_trajectory)

        assert decode(compressed.absolute) == expected
        assert decode(compressed.delta) == expected
        assert compressor.decompress() == expected

    def test_save_and_load(self, test_output_dir, sample_trajectory):
        compressor = TrajectoryCompressor(epsilon=0.0001)
        output_file = test_output_dir / "track.tpz"

        compressed, _ = compressor.compress(sample_trajectory)
        archive_size = compressor.save(output_file)

        assert output_file.exists()
        assert output_file.stat().st_size == archive_size

        loaded = TrajectoryCompressor.load(output_file)
        assert loaded.delta == compressed.delta
        assert loaded.absolute == b''
        assert loaded.epsilon == 0.0001
        assert loaded.original_count == len(sample_trajectory)
        assert compressor.decompress(loaded) == simplify(sample_trajectory, 0.0001)

    def test_save_absolute_variant(self, test_output_dir, small_trajectory):
        compressor = TrajectoryCompressor(epsilon=0.0)
        output_file = test_output_dir / "absolute.tpz"

        compressor.compress(small_trajectory)
        compressor.save(output_file, variant=Variant.ABSOLUTE)

        loaded = TrajectoryCompressor.load(output_file)
        assert loaded.delta == b''
        assert compressor.decompress(loaded) == small_trajectory

    def test_save_is_deterministic(self, test_output_dir, sample_trajectory):
        first, second = test_output_dir / "a.tpz", test_output_dir / "b.tpz"
        for path in (first, second):
            compressor = TrajectoryCompressor()
            compressor.compress(sample_trajectory)
            compressor.save(path)

        assert first.read_bytes() == second.read_bytes()

    def test_save_without_compress(self, test_output_dir):
        with pytest.raises(ValueError, match="No compressed data"):
            TrajectoryCompressor().save(test_output_dir / "empty.tpz")

    def test_decompress_without_data(self):
        with pytest.raises(ValueError, match="No compressed data"):
            TrajectoryCompressor().decompress()

    def test_unsupported_archive_version(self, test_output_dir):
        path = test_output_dir / "future.tpz"
        payload = msgpack.packb({'version': '9.9', 'variant': 'delta', 'payload': b''}, use_bin_type=True)
        path.write_bytes(zstd.ZstdCompressor().compress(payload))

        with pytest.raises(ValueError, match="Unsupported format version"):
            TrajectoryCompressor.load(path)

    def test_load_rejects_non_archive(self, test_output_dir):
        path = test_output_dir / "garbage.tpz"
        path.write_bytes(b"not an archive at all")

        with pytest.raises(DecodingCorrupt, match="garbage.tpz"):
            TrajectoryCompressor.load(path)

    @pytest.mark.parametrize("content", [
        b"\xc1",
        msgpack.packb([1, 2, 3]),
        msgpack.packb({'version': '1.0', 'variant': 'delta'}),
        msgpack.packb({'version': '1.0', 'variant': 'polar', 'epsilon': 0.0,
                       'original_count': 0, 'simplified_count': 0, 'payload': b''}),
    ])
    def test_load_rejects_malformed_container(self, test_output_dir, content):
        """Valid zstd frames whose content is not an archive map"""
        path = test_output_dir / "malformed.tpz"
        path.write_bytes(zstd.ZstdCompressor().compress(content))

        with pytest.raises(DecodingCorrupt):
            TrajectoryCompressor.load(path)

    def test_negative_epsilon(self):
        with pytest.raises(InvalidArgument):
            TrajectoryCompressor(epsilon=-1.0)

    def test_empty_trajectory(self):
        compressed, stats = TrajectoryCompressor().compress([])

        assert stats.original_points == 0
        assert decode(compressed.delta) == []
        assert stats.point_ratio == 0.0

    def test_plt_directory_end_to_end(self, test_data_dir):
        points, source_size = load_plt_directory(test_data_dir)

        _, stats = TrajectoryCompressor(epsilon=0.00001).compress(points, source_size=source_size)

        assert stats.source_size == source_size
        assert stats.delta_vs_source < 100.0
        assert stats.delta_vs_absolute < 100.0

    def test_report_table_rows(self, sample_trajectory):
        _, stats = TrajectoryCompressor().compress(sample_trajectory, source_size=40_000)
        stats.archive_size = 123

        table = build_report_table(stats)

        assert table.row_count == 10


class TestCli:
    """Click commands"""

    def test_compress_and_dump(self, test_data_dir, test_output_dir):
        runner = CliRunner()
        archive = test_output_dir / "geolife.tpz"

        result = runner.invoke(cli, ['compress', '-i', str(test_data_dir), '-o', str(archive),
                                     '-e', '0', '-m'])

        assert result.exit_code == 0, result.output
        assert "Read 7 points" in result.output
        assert "Compression Results" in result.output
        assert archive.exists()

        result = runner.invoke(cli, ['dump', '-c', str(archive), '--limit', '2'])

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0] == "timestamp,latitude,longitude,altitude"
        assert len(lines) == 3
        assert lines[1] == "1224727200000,39.974294,116.399741,-777.0"

    def test_epsilon_from_environment(self, test_data_dir, test_output_dir):
        runner = CliRunner()
        archive = test_output_dir / "env.tpz"

        result = runner.invoke(cli, ['compress', '-i', str(test_data_dir), '-o', str(archive)],
                               env={'TRAJPRESS_EPSILON': '1.0'})

        assert result.exit_code == 0, result.output
        assert TrajectoryCompressor.load(archive).simplified_count == 2

    def test_missing_input(self, test_output_dir):
        result = CliRunner().invoke(cli, ['compress', '-i', 'does/not/exist', '-o',
                                          str(test_output_dir / "x.tpz")])

        assert result.exit_code == 1
        assert "Input not found" in result.output

    def test_negative_epsilon(self, test_data_dir, test_output_dir):
        result = CliRunner().invoke(cli, ['compress', '-i', str(test_data_dir), '-o',
                                          str(test_output_dir / "x.tpz"), '--epsilon=-1'])

        assert result.exit_code == 1
        assert "epsilon must be non-negative" in result.output

    def test_dump_garbage_file(self, tmp_path):
        bad = tmp_path / "bad.tpz"
        bad.write_bytes(b"not an archive at all")

        result = CliRunner().invoke(cli, ['dump', '-c', str(bad)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert "not a trajpress archive" in result.output

    def test_dump_missing_archive(self, tmp_path):
        result = CliRunner().invoke(cli, ['dump', '-c', str(tmp_path / "missing.tpz")])

        assert result.exit_code == 1
        assert "not found" in result.output
