"""In-memory stand-ins for the knowledge lookup and the language model."""
from ingres_api.app.schemas.chat import KnowledgeRow


class FakeKnowledge:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def search(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return list(self.rows)

    def close(self):
        pass


class FakeLLM:
    def __init__(self, reply="Groundwater levels are stable.", error=None, raw=None):
        self.reply = reply
        self.error = error
        self.raw = raw
        self.calls = []

    def chat(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        if self.raw is not None:
            return self.raw
        return {"message": {"role": "assistant", "content": self.reply}}

    @property
    def user_prompt(self):
        return self.calls[-1]["messages"][1]["content"]


MOHANLALGANJ_ROWS = [
    KnowledgeRow(block="Mohanlalganj", state="UP", year=2023, metric="depletion", value="high"),
    KnowledgeRow(block="Mohanlalganj", state="UP", year=2022, metric="depletion", value="medium"),
]
