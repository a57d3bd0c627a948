"""
Unit tests for compressors and the compressor registry
======================================================

Tests for compressors/ including:
- Built-in compressors shrink redundant data and leave the sink open
- Deterministic output
- Registry lookup, runtime registration and entry point plugins
"""

import io

import lz4.frame
import pytest

from base_classes import ByteCounter
from compressors import (
    Compressor,
    CompressorInfo,
    CompressorRegistry,
    LZ4Compressor,
    UnknownCompressorError,
    get_compressor_registry,
)
from compressors.registry import BUILTIN_COMPRESSORS

ZEROS = bytes(256 * 1024)


class PassthroughCompressor(Compressor):
    """Writes input unchanged, for registry tests"""

    NAME = "passthrough"
    DEFAULT_LEVEL = 0
    DESCRIPTION = "No compression"

    def open(self, sink):
        return _PassthroughWriter(sink)


class _PassthroughWriter(io.RawIOBase):
    def __init__(self, sink):
        super().__init__()
        self._sink = sink

    def writable(self):
        return True

    def write(self, b):
        return self._sink.write(b)


def compressed_size(compressor: Compressor, data: bytes, chunk: int = 4096) -> int:
    sink = ByteCounter()
    with compressor.open(sink) as encoder:
        for i in range(0, len(data), chunk):
            encoder.write(data[i:i + chunk])
    return sink.written


class TestBuiltinCompressors:
    """Test the built-in compressors"""

    @pytest.mark.parametrize("compressor_class", BUILTIN_COMPRESSORS)
    def test_compresses_zeros(self, compressor_class):
        """Test that every built-in shrinks highly redundant data"""
        size = compressed_size(compressor_class(), ZEROS)
        assert 0 < size < len(ZEROS) // 10

    @pytest.mark.parametrize("compressor_class", BUILTIN_COMPRESSORS)
    def test_is_deterministic(self, compressor_class):
        """Test that identical input gives identical compressed size"""
        data = b"the quick brown fox jumps over the lazy dog " * 2000
        assert compressed_size(compressor_class(), data) == compressed_size(compressor_class(), data)

    @pytest.mark.parametrize("compressor_class", BUILTIN_COMPRESSORS)
    def test_does_not_close_sink(self, compressor_class):
        """Test that finishing the encoder leaves the sink usable"""
        sink = ByteCounter()
        with compressor_class().open(sink) as encoder:
            encoder.write(b"abc" * 100)
        assert not sink.closed

    def test_default_levels(self):
        """Test that every built-in defaults to a fast level"""
        for compressor_class in BUILTIN_COMPRESSORS:
            assert compressor_class().level == 1

    def test_explicit_level(self):
        """Test that an explicit level overrides the default"""
        assert LZ4Compressor(level=9).level == 9

    @pytest.mark.parametrize("compressor_class", BUILTIN_COMPRESSORS)
    def test_level_bounds_accepted(self, compressor_class):
        """Test that both ends of each level range can compress"""
        for level in (compressor_class.MIN_LEVEL, compressor_class.MAX_LEVEL):
            assert compressed_size(compressor_class(level), b"abc" * 1000) > 0

    @pytest.mark.parametrize("compressor_class", BUILTIN_COMPRESSORS)
    def test_level_out_of_range(self, compressor_class):
        """Test that levels outside the range are rejected on construction"""
        with pytest.raises(ValueError, match="above the maximum"):
            compressor_class(compressor_class.MAX_LEVEL + 1)
        with pytest.raises(ValueError, match="below the minimum"):
            compressor_class(compressor_class.MIN_LEVEL - 1)

    def test_non_integer_level(self):
        """Test that a level must be an integer"""
        with pytest.raises(ValueError, match="must be an integer"):
            LZ4Compressor(level=1.5)

    def test_unbounded_levels(self):
        """Test that compressors without a range accept any integer level"""
        assert PassthroughCompressor(level=-100).level == -100

    def test_lz4_output_is_a_valid_frame(self):
        """Test that the LZ4 encoder writes a complete frame into the sink"""
        sink = io.BytesIO()
        data = b"sampled block " * 500
        with LZ4Compressor().open(sink) as encoder:
            encoder.write(data)
        assert lz4.frame.decompress(sink.getvalue()) == data


class TestCompressorRegistry:
    """Test CompressorRegistry"""

    def test_builtins_available(self):
        """Test that built-in compressors are registered"""
        registry = CompressorRegistry()
        names = [info.name for info in registry.available()]
        assert names == ['bzip2', 'gzip', 'lz4', 'zstd']
        assert all(info.source == 'builtin' for info in registry.available())

    def test_create(self):
        """Test creating a compressor by name"""
        registry = CompressorRegistry()
        compressor = registry.create('lz4', 3)
        assert isinstance(compressor, LZ4Compressor)
        assert compressor.level == 3

    def test_unknown_compressor(self):
        """Test that unknown names raise UnknownCompressorError"""
        registry = CompressorRegistry()
        with pytest.raises(UnknownCompressorError, match="Unknown compressor 'lzma'"):
            registry.create('lzma')
        with pytest.raises(KeyError):
            registry.get('lzma')

    def test_runtime_registration(self):
        """Test registering a custom compressor at runtime"""
        registry = CompressorRegistry()
        registry.register(CompressorInfo(
            name='passthrough',
            compressor_class=PassthroughCompressor,
            source='custom',
        ))
        compressor = registry.create('passthrough')
        assert isinstance(compressor, PassthroughCompressor)
        assert compressed_size(compressor, b"x" * 1000) == 1000

    def test_register_rejects_non_compressors(self):
        """Test that registering a non-Compressor raises TypeError"""
        registry = CompressorRegistry()
        with pytest.raises(TypeError):
            registry.register(CompressorInfo(name='bad', compressor_class=dict))

    def test_plugin_loading(self, mocker):
        """Test that entry point plugins are loaded"""
        ep = mocker.Mock()
        ep.name = 'passthrough'
        ep.load.return_value = PassthroughCompressor

        mocker.patch('compressors.registry.entry_points', return_value=[ep])
        info = CompressorRegistry().get('passthrough')

        assert info.source == 'plugin'
        assert info.compressor_class is PassthroughCompressor
        assert info.description == "No compression"

    def test_broken_plugins_are_skipped(self, mocker):
        """Test that plugins failing to load or of the wrong type are skipped"""
        broken = mocker.Mock()
        broken.name = 'broken'
        broken.load.side_effect = ImportError("missing module")
        wrong_type = mocker.Mock()
        wrong_type.name = 'wrong'
        wrong_type.load.return_value = object

        mocker.patch('compressors.registry.entry_points', return_value=[broken, wrong_type])
        names = [info.name for info in CompressorRegistry().available()]

        assert 'broken' not in names
        assert 'wrong' not in names
        assert 'lz4' in names

    def test_plugins_cannot_shadow_builtins(self, mocker):
        """Test that a plugin reusing a built-in name is ignored"""
        ep = mocker.Mock()
        ep.name = 'lz4'
        ep.load.return_value = PassthroughCompressor

        mocker.patch('compressors.registry.entry_points', return_value=[ep])
        assert CompressorRegistry().get('lz4').compressor_class is LZ4Compressor

    def test_global_registry_is_shared(self):
        """Test that the process-wide registry is created once"""
        assert get_compressor_registry() is get_compressor_registry()
