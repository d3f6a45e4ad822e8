"""Slack 유틸리티 패키지"""

from printbot.slack.client import SlackChat
from printbot.slack.file_handler import download_file

__all__ = [
    "SlackChat",
    "download_file",
]
