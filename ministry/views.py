from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db.models import Count
from django.core.paginator import Paginator
from django.http import HttpResponse
from .models import Church, Minister, MinistryRank, MinistrySkill
from .forms import (ChurchForm, MinisterSearchForm, MinistryRankForm,
                    MinistrySkillForm, ReferenceSearchForm)
from .pdf import PdfLookups, build_sections, pdf_filename, render_minister_pdf
from .serializers import minister_to_draft
from .services import (Conflict, InvalidPayload, delete_minister, delete_reference,
                       save_reference, search_ministers, search_references)


# ════════════════════════════════════════════════════════════
# MINISTER LIST (HTMX-enabled)
# ════════════════════════════════════════════════════════════
@login_required
def minister_list(request):
    """
    All ministers, with HTMX:
    - live search (debounced in the template)
    - civil status / gender / church filters
    - sortable, 20 per page
    """
    ministers = Minister.objects.select_related('church').all()

    # ── Search & Filter ──
    form = MinisterSearchForm(request.GET)
    if form.is_valid():
        q = form.cleaned_data.get('q')
        if q:
            ministers = search_ministers(ministers, q)

        civil_status = form.cleaned_data.get('civil_status')
        if civil_status:
            ministers = ministers.filter(civil_status=civil_status)

        gender = form.cleaned_data.get('gender')
        if gender:
            ministers = ministers.filter(gender=gender)

        church = form.cleaned_data.get('church')
        if church:
            ministers = ministers.filter(church=church)

        sort = form.cleaned_data.get('sort')
        if sort:
            ministers = ministers.order_by(sort, 'pk')

    # ── Pagination ──
    paginator = Paginator(ministers, 20)
    page_obj  = paginator.get_page(request.GET.get('page', 1))

    context = {
        'page_obj': page_obj,
        'form': form,
        'total_count': paginator.count,
    }

    # ── HTMX: table only ──
    if request.htmx:
        return render(request, 'ministry/partials/minister_table.html', context)

    return render(request, 'ministry/minister_list.html', context)


# ════════════════════════════════════════════════════════════
# MINISTER DETAIL
# ════════════════════════════════════════════════════════════
@login_required
def minister_detail(request, pk):
    """Read-only profile; same sections as the printed form."""
    minister = get_object_or_404(Minister.objects.select_related('church'), pk=pk)

    context = {
        'minister': minister,
        'sections': build_sections(minister_to_draft(minister), PdfLookups.from_database()),
    }
    return render(request, 'ministry/minister_detail.html', context)


@login_required
def minister_pdf(request, pk):
    """Download the Ministry Application Form of a stored minister."""
    minister = get_object_or_404(Minister, pk=pk)
    draft = minister_to_draft(minister)

    response = HttpResponse(
        render_minister_pdf(draft, PdfLookups.from_database()),
        content_type='application/pdf',
    )
    response['Content-Disposition'] = f'attachment; filename="{pdf_filename(draft)}"'
    return response


# ════════════════════════════════════════════════════════════
# MINISTER DELETE (HTMX Inline)
# ════════════════════════════════════════════════════════════
@login_required
def minister_delete(request, pk):
    """
    Permanently delete a minister and every sub-record.
    HTMX: inline confirmation + row removal.
    """
    minister = get_object_or_404(Minister, pk=pk)

    if request.method == 'POST':
        name = minister.full_name
        delete_minister(minister)
        messages.warning(request, f'{name} has been deleted.')

        # HTMX: empty response removes the row
        if request.htmx:
            response = HttpResponse(status=204)
            response['HX-Trigger'] = 'ministerDeleted'
            return response
        return redirect('ministry:list')

    context = {'minister': minister}

    if request.htmx:
        return render(request, 'ministry/partials/minister_delete_confirm.html', context)

    return render(request, 'ministry/minister_confirm_delete.html', context)


# ════════════════════════════════════════════════════════════
# RANKS / SKILLS / CHURCHES
# ════════════════════════════════════════════════════════════
REFERENCE_TYPES = {
    'rank': {
        'model': MinistryRank,
        'form': MinistryRankForm,
        'label': 'ministry rank',
        'plural': 'Ministry Ranks',
        'export_url': 'ministry:export_ranks',
        'columns': ['Name', 'Description', 'Ministers', 'Updated'],
        'search_fields': ('name', 'description'),
    },
    'skill': {
        'model': MinistrySkill,
        'form': MinistrySkillForm,
        'label': 'ministry skill',
        'plural': 'Ministry Skills',
        'export_url': 'ministry:export_skills',
        'columns': ['Name', 'Description', 'Ministers', 'Updated'],
        'search_fields': ('name', 'description'),
    },
    'church': {
        'model': Church,
        'form': ChurchForm,
        'label': 'church',
        'plural': 'Churches',
        'export_url': 'ministry:export_churches',
        'columns': ['Name', 'Address', 'Ministers', 'Updated'],
        'search_fields': ('name', 'address', 'email'),
    },
}


def _annotated(kind):
    model = REFERENCE_TYPES[kind]['model']
    if kind == 'rank':
        return model.objects.annotate(minister_total=Count('experiences__minister', distinct=True))
    if kind == 'skill':
        return model.objects.annotate(minister_total=Count('assignments__minister', distinct=True))
    return model.objects.annotate(minister_total=Count('ministers', distinct=True))


def _reference_list(request, kind):
    config = REFERENCE_TYPES[kind]
    items = _annotated(kind)

    form = ReferenceSearchForm(request.GET)
    if form.is_valid():
        items = search_references(items, form.cleaned_data.get('q'), config['search_fields'])
        items = items.order_by(form.cleaned_data.get('sort') or 'name', 'pk')

    paginator = Paginator(items, 20)
    page_obj  = paginator.get_page(request.GET.get('page', 1))

    context = {
        'kind': kind,
        'config': config,
        'page_obj': page_obj,
        'form': form,
        'total_count': paginator.count,
    }

    if request.htmx:
        return render(request, 'ministry/partials/reference_table.html', context)
    return render(request, 'ministry/reference_list.html', context)


def _reference_form(request, kind, pk=None):
    config = REFERENCE_TYPES[kind]
    instance = get_object_or_404(config['model'], pk=pk) if pk else None

    if request.method == 'POST':
        form = config['form'](request.POST, instance=instance)
        try:
            obj = save_reference(form, config['label'])
        except Conflict as exc:
            messages.error(request, str(exc))
        except InvalidPayload:
            messages.error(request, 'Please correct the errors below.')
        else:
            verb = 'updated' if instance else 'added'
            messages.success(request, f'{obj} was {verb} successfully.')

            if request.htmx:
                response = HttpResponse(status=204)
                response['HX-Trigger'] = f'{kind}Saved'
                return response
            return redirect(f'ministry:{kind}_list')
    else:
        form = config['form'](instance=instance)

    context = {
        'kind': kind,
        'config': config,
        'form': form,
        'object': instance,
        'title': f'Edit {instance}' if instance else f'Add {config["label"].title()}',
        'submit_text': 'Save Changes' if instance else 'Save',
    }

    if request.htmx:
        return render(request, 'ministry/partials/reference_form_modal.html', context)
    return render(request, 'ministry/reference_form.html', context)


def _reference_delete(request, kind, pk):
    config = REFERENCE_TYPES[kind]
    obj = get_object_or_404(config['model'], pk=pk)

    if request.method == 'POST':
        try:
            delete_reference(obj, config['label'])
        except Conflict as exc:
            messages.error(request, str(exc))
        else:
            messages.warning(request, f'{obj} has been deleted.')

        if request.htmx:
            response = HttpResponse(status=204)
            response['HX-Trigger'] = f'{kind}Deleted'
            return response
        return redirect(f'ministry:{kind}_list')

    context = {'kind': kind, 'config': config, 'object': obj}
    return render(request, 'ministry/reference_confirm_delete.html', context)


@login_required
def rank_list(request):
    return _reference_list(request, 'rank')


@login_required
def rank_create(request):
    return _reference_form(request, 'rank')


@login_required
def rank_update(request, pk):
    return _reference_form(request, 'rank', pk)


@login_required
def rank_delete(request, pk):
    return _reference_delete(request, 'rank', pk)


@login_required
def skill_list(request):
    return _reference_list(request, 'skill')


@login_required
def skill_create(request):
    return _reference_form(request, 'skill')


@login_required
def skill_update(request, pk):
    return _reference_form(request, 'skill', pk)


@login_required
def skill_delete(request, pk):
    return _reference_delete(request, 'skill', pk)


@login_required
def church_list(request):
    return _reference_list(request, 'church')


@login_required
def church_create(request):
    return _reference_form(request, 'church')


@login_required
def church_update(request, pk):
    return _reference_form(request, 'church', pk)


@login_required
def church_delete(request, pk):
    return _reference_delete(request, 'church', pk)


# ════════════════════════════════════════════════════════════
# CHURCH DETAIL (HTMX-enabled)
# ════════════════════════════════════════════════════════════
@login_required
def church_detail(request, pk):
    """
    One church with the ministers designated to it.
    HTMX: the minister table refreshes on search and paging.
    """
    church = get_object_or_404(Church, pk=pk)
    ministers = church.ministers.select_related('church').order_by('last_name', 'first_name')

    q = request.GET.get('q', '').strip()
    if q:
        ministers = search_ministers(ministers, q)

    paginator = Paginator(ministers, 20)
    page_obj  = paginator.get_page(request.GET.get('page', 1))

    context = {
        'church': church,
        'page_obj': page_obj,
        'q': q,
        'total_count': paginator.count,
    }

    if request.htmx:
        return render(request, 'ministry/partials/church_minister_table.html', context)

    return render(request, 'ministry/church_detail.html', context)
