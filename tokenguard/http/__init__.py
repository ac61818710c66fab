from .transport import AiohttpTransport, RequestSpec, Response, Transport

__all__ = ["AiohttpTransport", "RequestSpec", "Response", "Transport"]
