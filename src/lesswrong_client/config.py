import os

from dotenv import load_dotenv

load_dotenv()


# LessWrong GraphQL endpoint (public, unauthenticated)
LESSWRONG_GRAPHQL_URL = os.getenv("LESSWRONG_GRAPHQL_URL", "https://www.lesswrong.com/graphql")
LESSWRONG_TIMEOUT = float(os.getenv("LESSWRONG_TIMEOUT", "30.0"))
LESSWRONG_USER_AGENT = os.getenv("LESSWRONG_USER_AGENT", "lesswrong-client/0.1 (+https://www.lesswrong.com)")

# Comments query terms
COMMENTS_VIEW = os.getenv("COMMENTS_VIEW", "postCommentsTop")
DEFAULT_COMMENT_LIMIT = int(os.getenv("DEFAULT_COMMENT_LIMIT", "500"))
