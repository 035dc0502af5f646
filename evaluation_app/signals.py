import logging
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from evaluation_app.models import Criterion, EvaluationSubmission
from evaluation_app.services.weight_ledger import allocated_weight

logger = logging.getLogger(__name__)


#-------------------------------------------
# Allocation trail whenever criteria change (create, update, delete)

@receiver([post_save, post_delete], sender=Criterion)
def _criterion_changed(sender, instance: Criterion, **kwargs):
    used = allocated_weight(instance.type_id)
    logger.debug("Type %s allocation now %s%% (remaining %s%%)", instance.type_id, used, 100 - used)


#-------------------------------------------
@receiver(post_delete, sender=EvaluationSubmission)
def _submission_deleted(sender, instance: EvaluationSubmission, **kwargs):
    logger.debug("Submission %s (%s) of %s removed", instance.pk, instance.kind, instance.subject_id)
