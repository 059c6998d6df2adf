from django.shortcuts import render
from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.utils import timezone
from ministry.models import Church, CivilStatus, Minister, MinistryRank, MinistrySkill
import datetime


BIRTHDAY_WINDOW_DAYS = 7


def upcoming_birthdays(days=BIRTHDAY_WINDOW_DAYS, limit=5, today=None):
    """Ministers whose birthday falls within the next `days` days, soonest first."""
    today = today or datetime.date.today()
    dates = [today + datetime.timedelta(days=i) for i in range(days)]

    months = {d.month for d in dates}
    # 29 February birthdays count on 1 March outside leap years
    if any((d.month, d.day) == (3, 1) for d in dates):
        months.add(2)

    candidates = Minister.objects.select_related('church').filter(date_of_birth__month__in=months)
    result = []
    for minister in candidates:
        days_until = minister.days_until_birthday(today)
        if days_until is not None and days_until < days:
            minister.days_until = days_until
            result.append(minister)

    result.sort(key=lambda m: (m.days_until, m.last_name))
    return result[:limit]


@login_required
def dashboard_home(request):
    """
    Dashboard with live counts from the database.
    """

    # ── Basic Stats ──
    total_ministers = Minister.objects.count()
    total_churches = Church.objects.count()
    total_ranks = MinistryRank.objects.count()
    total_skills = MinistrySkill.objects.count()

    # Registered this month
    today = timezone.localdate()
    first_day_of_month = today.replace(day=1)
    ministers_this_month = Minister.objects.filter(created_at__date__gte=first_day_of_month).count()

    # Civil status breakdown
    counts = dict(
        Minister.objects.values_list('civil_status').annotate(total=Count('id')).order_by()
    )
    civil_status_breakdown = [
        {'value': value, 'label': label, 'count': counts.get(value, 0)}
        for value, label in CivilStatus.choices
    ]

    # ── Recent Ministers ──
    recent_ministers = Minister.objects.select_related('church').order_by('-created_at')[:5]

    context = {
        'stats': {
            'total_ministers': total_ministers,
            'ministers_this_month': ministers_this_month,
            'total_churches': total_churches,
            'total_ranks': total_ranks,
            'total_skills': total_skills,
        },
        'civil_status_breakdown': civil_status_breakdown,
        'recent_ministers': recent_ministers,
        'upcoming_birthdays': upcoming_birthdays(),
    }

    return render(request, 'dashboard/home.html', context)
