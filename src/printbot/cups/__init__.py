"""CUPS(IPP) 인쇄 패키지"""

from printbot.cups.client import CupsClient

__all__ = ["CupsClient"]
