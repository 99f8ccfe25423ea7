from shredder.engine.base import BaseRedactor
from shredder.engine.models import FileBuffer, Narrator, RedactedBlob
from shredder.engine.patterns import REDACTION_RULES, RedactionRule
from shredder.logging.logger import Log
from shredder.text.inspector import decode_text


class TextRedactor(BaseRedactor):
    """Applies the redaction rules in order; each rule sees the previous output."""

    MIME_TYPE = "text/plain"

    def __init__(self, rules: tuple[RedactionRule, ...] = REDACTION_RULES) -> None:
        self._rules = rules

    def redact(self, file: FileBuffer, narrate: Narrator) -> RedactedBlob:
        text = decode_text(file.data)
        replaced = 0
        for rule in self._rules:
            text, count = rule.apply(text)
            replaced += count
            if count:
                Log.debug(f"Rule '{rule.label}' masked {count} tokens")

        narrate("[SUCCESS] REDACTION_COMPLETE: PATTERNS_MASKED")
        Log.info(f"Text redaction masked {replaced} tokens in {file.size} bytes")
        return RedactedBlob(data=text.encode("utf-8"), mime_type=self.MIME_TYPE)
