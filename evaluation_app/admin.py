from django import forms
from django.contrib import admin, messages
from .import models as m
from .exceptions import CapacityExceeded, ScoreInputError
from .services import criteria_catalog
from .services.weight_ledger import allocated_weight, can_allocate
from .services.evaluation_store import recompute_all


# ───────────────────────────────
#  Basic inline helpers
# ───────────────────────────────
class CriterionInline(admin.TabularInline):
    """Read-only; criteria are added and edited on their own admin page."""
    model = m.Criterion
    extra = 0
    fields = ("criteria", "weight", "level")
    readonly_fields = fields
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


# ───────────────────────────────
#  Evaluation type
# ───────────────────────────────
@admin.register(m.EvaluationType)
class EvaluationTypeAdmin(admin.ModelAdmin):
    list_display = ("tid", "name", "section_percentage", "allocated_weight")
    search_fields = ("name",)
    inlines = [CriterionInline]

    @admin.display(description="Allocated weight %")
    def allocated_weight(self, obj):
        return allocated_weight(obj.tid)


# ───────────────────────────────
#  Criterion
# ───────────────────────────────
class CriterionAdminForm(forms.ModelForm):
    class Meta:
        model = m.Criterion
        fields = ("type", "criteria", "weight", "level")

    def clean(self):
        cleaned = super().clean()
        evaluation_type = cleaned.get("type")
        weight = cleaned.get("weight")
        if evaluation_type is None or weight is None:
            return cleaned

        excluding = self.instance.pk
        allocation = can_allocate(evaluation_type.pk, weight, excluding=excluding)
        if not allocation.allowed:
            exc = CapacityExceeded(allocation.remaining, excluding_row=excluding is not None)
            raise forms.ValidationError({"weight": str(exc.detail)})
        return cleaned


@admin.register(m.Criterion)
class CriterionAdmin(admin.ModelAdmin):
    form = CriterionAdminForm
    list_display = ("cid", "criteria", "type", "weight", "level")
    list_filter = ("type",)
    search_fields = ("criteria", "type__name")
    autocomplete_fields = ["type"]

    def save_model(self, request, obj, form, change):
        # type total is re-checked under the row lock, as for API writes
        data = {"tid": obj.type_id, "criteria": obj.criteria, "weight": obj.weight, "level": obj.level}
        if change:
            saved = criteria_catalog.update_criterion(obj.pk, data)
        else:
            saved = criteria_catalog.create_criterion(data)
        obj.pk = saved.pk
        obj.weight = saved.weight


# ───────────────────────────────
#  Evaluation submissions
# ───────────────────────────────
@admin.register(m.EvaluationSubmission)
class EvaluationSubmissionAdmin(admin.ModelAdmin):
    list_display = ("eid", "kind", "subject", "rater", "period", "overall_result", "created_at")
    list_filter = ("kind", "period")
    search_fields = ("subject__name", "subject__email", "rater__name")
    autocomplete_fields = ["subject", "rater", "evaluation_type"]
    readonly_fields = ("results", "created_at", "updated_at")
    actions = ["recompute_results"]

    @admin.display(description="Overall")
    def overall_result(self, obj):
        return (obj.results or {}).get("overallResult")

    @admin.action(description="Recompute results from sections")
    def recompute_results(self, request, queryset):
        try:
            count = recompute_all(queryset)
        except ScoreInputError as exc:
            self.message_user(request, f"Nothing recomputed: {exc.detail}", level=messages.ERROR)
            return
        self.message_user(request, f"Recomputed {count} evaluations.")
