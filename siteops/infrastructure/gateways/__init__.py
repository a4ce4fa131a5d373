from .email_gateway import EmailGateway
from .github_gateway import GitHubGateway

__all__ = ["EmailGateway", "GitHubGateway"]
