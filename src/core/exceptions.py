"""Exception hierarchy for the mail bridge."""


class MailBridgeError(Exception):
    """Base exception for all mail bridge errors."""
    pass


class UsageError(MailBridgeError):
    """A command was issued without its required message id."""
    pass


class AdapterError(MailBridgeError):
    """An external collaborator (Graph, LLM, Telegram) call failed."""
    pass


class MailGatewayError(AdapterError):
    """Microsoft Graph fetch or reply failed."""
    pass


class DraftGenerationError(AdapterError):
    """LLM draft generation failed."""
    pass


class NotifierError(AdapterError):
    """Telegram delivery failed."""
    pass


class MalformedRequestError(MailBridgeError):
    """Inbound webhook payload could not be validated."""
    pass
