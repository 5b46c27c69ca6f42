from enum import Enum


class OutputFormat(str, Enum):
    js = "js"
    json = "json"


class DisplayFormat(str, Enum):
    md = "md"
    json = "json"
