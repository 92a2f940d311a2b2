from fastapi import Request
from ..contracts.sentiment import SentimentProvider

def get_sentiment_provider(request: Request) -> SentimentProvider:
    return request.app.state.sentiment_provider
