"""Feedback template — relays a visitor's message to the support inbox."""


class FeedbackTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"Feedback: {context['subject']}",
            "body": f"From: {context['email']}\n\n{context['message']}",
        }
