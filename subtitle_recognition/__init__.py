"""
Template matching recognition of burned-in subtitles.
"""

from .geometry import Bounds, Point
from .raster import Color, FramePair, Raster, RasterFormatError
from .shapes import Shape, make_shape
from .segmentation import Blob, ComponentSegmenter, segment_frame, blobs_to_shapes
from .rasterizer import GlyphRasterizer, GlyphRasterizationError, PillowGlyphRasterizer
from .template_manager import GlyphTemplateCache, UnsupportedCharacterError
from .matcher import CharacterMatch, match_character, match_all_characters
from .ligatures import recognize_shape
from .dot_merger import merge_fragments, reading_order
from .lines import Line, RecognizedCharacter, assemble_text, group_lines, line_to_text
from .recognizer import RecognitionResult, SubtitleRecognizer

__all__ = [
    'Bounds',
    'Point',
    'Color',
    'FramePair',
    'Raster',
    'RasterFormatError',
    'Shape',
    'make_shape',
    'Blob',
    'ComponentSegmenter',
    'segment_frame',
    'blobs_to_shapes',
    'GlyphRasterizer',
    'GlyphRasterizationError',
    'PillowGlyphRasterizer',
    'GlyphTemplateCache',
    'UnsupportedCharacterError',
    'CharacterMatch',
    'match_character',
    'match_all_characters',
    'recognize_shape',
    'merge_fragments',
    'reading_order',
    'Line',
    'RecognizedCharacter',
    'assemble_text',
    'group_lines',
    'line_to_text',
    'RecognitionResult',
    'SubtitleRecognizer',
]
