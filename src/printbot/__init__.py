"""printbot: 슬랙 파일 공유 → CUPS 인쇄 봇"""

__version__ = "0.1.0"
