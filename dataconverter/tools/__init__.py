from .progress import ProcessingProgress
from .registry import Tool, TOOLS, get_tool_by_slug, get_all_tools, get_tools_by_category
from .pdf_tools import convert_pdf_to_dark_mode, flatten_pdf, get_pdf_info
from .image_tools import WatermarkOptions, add_watermark
from .video_tools import GifOptions, create_gif, extract_audio, remove_audio

__all__ = [
    "ProcessingProgress",
    "Tool",
    "TOOLS",
    "get_tool_by_slug",
    "get_all_tools",
    "get_tools_by_category",
    "convert_pdf_to_dark_mode",
    "flatten_pdf",
    "get_pdf_info",
    "WatermarkOptions",
    "add_watermark",
    "GifOptions",
    "create_gif",
    "extract_audio",
    "remove_audio",
]
