from .topic_completion import TopicCompletionPolicy

__all__ = ["TopicCompletionPolicy"]
