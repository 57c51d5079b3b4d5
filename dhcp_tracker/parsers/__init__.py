# dhcp_tracker/parsers/__init__.py
from .registry import register_parser, get_parser, run_parser
from .dhcp import DhcpScopesParser  # ← выполняет register_parser внутри dhcp.py
