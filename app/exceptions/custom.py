class ElevenLabsError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")


class WebhookSignatureError(Exception):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid webhook signature: {reason}")


class WebhookPayloadError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedWebhookTypeError(WebhookPayloadError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported webhook type: {kind}")
