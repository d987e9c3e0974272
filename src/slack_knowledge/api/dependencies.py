"""FastAPI dependency providers for the service components built in the lifespan."""

from fastapi import Request

from slack_knowledge.config import Settings
from slack_knowledge.llm.classifier import KnowledgeClassifier
from slack_knowledge.slack.extractor import SlackExtractor
from slack_knowledge.store import KnowledgeStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_extractor(request: Request) -> SlackExtractor:
    return request.app.state.extractor


def get_classifier(request: Request) -> KnowledgeClassifier:
    return request.app.state.classifier


def get_store(request: Request) -> KnowledgeStore:
    return request.app.state.store
