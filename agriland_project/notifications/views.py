from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from notifications.models import Notification
from notifications.services import notification_stats, run_harvest_check


# ============================================================
# ON-DEMAND HARVEST CHECK
# ============================================================

@login_required
@require_POST
def harvest_check(request):
    """
    Run the harvest check now. Same result shape as the
    scheduled run; 500 when the run could not start.
    """
    if not request.user.can_run_harvest_check:
        return JsonResponse(
            {"success": False, "error": "Only admins and contributors can run the harvest check."},
            status=403,
        )

    summary = run_harvest_check()

    return JsonResponse(
        summary.as_dict(),
        status=200 if summary.success else 500,
    )


# ============================================================
# USER ACTIONS
# ============================================================

def _serialize(notification):
    return {
        "id": notification.pk,
        "type": notification.type,
        "priority": notification.priority,
        "status": notification.status,
        "title": notification.title,
        "is_read": notification.is_read,
        "is_dismissed": notification.is_dismissed,
        "land_id": notification.land_id,
        "farm_work_id": notification.farm_work_id,
    }


@login_required
@require_POST
def mark_read(request, pk):
    notification = get_object_or_404(Notification, pk=pk, recipient=request.user)
    notification.mark_as_read()
    return JsonResponse(_serialize(notification))


@login_required
@require_POST
def dismiss(request, pk):
    notification = get_object_or_404(Notification, pk=pk, recipient=request.user)
    notification.dismiss()
    return JsonResponse(_serialize(notification))


@login_required
@require_GET
def stats(request):
    # Admins see totals for everyone
    if request.user.role == request.user.Role.ADMIN:
        rows = notification_stats()
    else:
        rows = notification_stats(user=request.user)

    return JsonResponse({"stats": rows})
