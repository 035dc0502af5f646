from evaluation_app.models import SubmissionKind


class SubmissionKindConverter:
    """`self` | `peer` | `supervisor` in the URL ↔ SubmissionKind."""
    regex = "self|peer|supervisor"

    def to_python(self, value):
        return SubmissionKind.from_slug(value)

    def to_url(self, value):
        return str(getattr(value, "value", value)).lower()
