from .vision_tool import VisionTool, parse_scan_output

__all__ = [
    "VisionTool",
    "parse_scan_output",
]
