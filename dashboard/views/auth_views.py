import logging

from django.conf import settings
from django.contrib.auth import logout
from django.http import JsonResponse, HttpResponseRedirect
from django.views.decorators.http import require_POST

from ..auth_services import AuthenticationService
from ..services.user_service import RegistrationService

logger = logging.getLogger(__name__)


@require_POST
def login_view(request):
    error_message = AuthenticationService().authenticate(None, request.POST, request)
    return JsonResponse({'message': error_message}, status=400)


@require_POST
def register_view(request):
    state = RegistrationService().register(None, request.POST)
    return JsonResponse(state.to_dict(), status=400)


@require_POST
def logout_view(request):
    logout(request)
    return HttpResponseRedirect(settings.LOGOUT_REDIRECT_URL)
