"""
wpxmlrpc - WordPress XML-RPC client
"""

__version__ = "0.1.0"

from wpxmlrpc.client import WordpressClient
from wpxmlrpc.dispatcher import Dispatcher
from wpxmlrpc.events import ErrorEvent, Observer, SendingEvent
from wpxmlrpc.utils.exceptions import ConfigError, DecodeError, RemoteFault, TransportError, WpXmlrpcError

__all__ = [
    "__version__",
    "WordpressClient",
    "Dispatcher",
    "ErrorEvent",
    "Observer",
    "SendingEvent",
    "ConfigError",
    "DecodeError",
    "RemoteFault",
    "TransportError",
    "WpXmlrpcError",
]
