from trailctl.clients.papertrail import PapertrailClient

__all__ = ["PapertrailClient"]
