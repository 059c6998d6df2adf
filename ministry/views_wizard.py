# ministry/views_wizard.py
"""
Minister registration / edit wizard.

The MinisterWizard lives in the session between requests:
create/edit start it, each POST validates one step, OVERVIEW submits
through the configured gateway, and closing discards it.
"""

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.http import HttpResponse
from django.urls import reverse
from .models import Minister
from .pdf import PdfLookups, build_sections, full_name, pdf_filename, render_minister_pdf
from .steps import get_step
from .wizard import MinisterWizard


SESSION_KEY = 'minister_wizard'


def _load(request):
    state = request.session.get(SESSION_KEY)
    return MinisterWizard.from_session(state) if state else None


def _save(request, wizard):
    request.session[SESSION_KEY] = wizard.to_session()


def _discard(request):
    request.session.pop(SESSION_KEY, None)


def _render_step(request, wizard, form=None, formsets=None):
    step = get_step(wizard.current_step)
    if form is None and formsets is None:
        form, formsets = step.build(wizard.draft)

    context = {
        'wizard': wizard,
        'step': step,
        'indicator': wizard.indicator,
        'form': form,
        'formsets': formsets or {},
        'title': f'Edit {full_name(wizard.draft)}' if wizard.is_edit else 'Register Minister',
    }
    if wizard.is_overview:
        context['sections'] = build_sections(wizard.draft, PdfLookups.from_database())

    if request.htmx:
        return render(request, 'ministry/partials/wizard_body.html', context)
    return render(request, 'ministry/minister_wizard.html', context)


def _after_move(request, wizard):
    _save(request, wizard)
    if request.htmx:
        return _render_step(request, wizard)
    return redirect('ministry:wizard')


def _close(request):
    _discard(request)
    if request.htmx:
        response = HttpResponse(status=204)
        response['HX-Redirect'] = reverse('ministry:list')
        return response
    return redirect('ministry:list')


# ════════════════════════════════════════════════════════════
# START
# ════════════════════════════════════════════════════════════
@login_required
def minister_create(request):
    """Start a fresh registration (drops any unfinished draft)."""
    _save(request, MinisterWizard())
    return redirect('ministry:wizard')


@login_required
def minister_update(request, pk):
    """Start editing a stored minister."""
    minister = get_object_or_404(Minister, pk=pk)
    _save(request, MinisterWizard.for_minister(minister))
    return redirect('ministry:wizard')


# ════════════════════════════════════════════════════════════
# STEPS
# ════════════════════════════════════════════════════════════
@login_required
def minister_wizard(request):
    """
    GET renders the current step. POST `action`:
    - next:   validate this step, merge its fields, advance
    - back:   previous step (closes the wizard from the first step)
    - cancel: discard the draft
    - submit: send the draft (OVERVIEW only)
    """
    wizard = _load(request)
    if wizard is None:
        messages.info(request, 'No registration in progress.')
        return redirect('ministry:list')

    if request.method != 'POST':
        return _render_step(request, wizard)

    action = request.POST.get('action', 'next')

    if action == 'cancel':
        messages.info(request, 'Changes were discarded.')
        return _close(request)

    if action == 'back':
        closed = []
        wizard.on_close = lambda: closed.append(True)
        wizard.on_back()
        if closed:
            return _close(request)
        return _after_move(request, wizard)

    if action == 'submit':
        if not wizard.is_overview:
            return _after_move(request, wizard)
        return _submit(request, wizard)

    result = get_step(wizard.current_step).submit(wizard.draft, request.POST)
    if not result.is_valid:
        return _render_step(request, wizard, result.form, result.formsets)

    wizard.update_fields(result.values)
    wizard.on_next()
    return _after_move(request, wizard)


def _submit(request, wizard):
    name = full_name(wizard.draft)
    if wizard.is_edit:
        wizard.on_success = lambda result: messages.success(request, f'{name} was updated successfully.')

    if not wizard.handle_submit():
        _save(request, wizard)
        return _render_step(request, wizard)

    _discard(request)

    if wizard.is_edit:
        if request.htmx:
            response = HttpResponse(status=204)
            response['HX-Redirect'] = reverse('ministry:detail', args=[wizard.minister_id])
            return response
        return redirect('ministry:detail', pk=wizard.minister_id)

    context = {'result': wizard.result, 'name': name}
    if request.htmx:
        return render(request, 'ministry/partials/wizard_success.html', context)
    return render(request, 'ministry/wizard_success.html', context)


@login_required
def minister_wizard_pdf(request):
    """PDF preview of the draft being edited."""
    wizard = _load(request)
    if wizard is None:
        return redirect('ministry:list')

    response = HttpResponse(
        render_minister_pdf(wizard.draft, PdfLookups.from_database()),
        content_type='application/pdf',
    )
    response['Content-Disposition'] = f'attachment; filename="{pdf_filename(wizard.draft)}"'
    return response
