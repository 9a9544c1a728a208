from .httpx_transport import HttpxTransport, AsyncHttpxTransport
