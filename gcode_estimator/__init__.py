from .analyzer import (
    GCodeParser,
    analyze_gcode_file,
    EncodingError
)
from .models import (
    GCodeMetadata,
    Position,
    PrintReport,
    SlicerType
)

__all__ = [
    'GCodeParser',
    'analyze_gcode_file',
    'EncodingError',
    'GCodeMetadata',
    'Position',
    'PrintReport',
    'SlicerType'
]
