# views.py
import logging
from itertools import groupby

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.exceptions import NotFound, ValidationError

from users.permissions import IsAdminRole

from .models import Service, ServiceCategory
from .seed_data import SERVICES
from .serializers import ServiceMiniSerializer, ServiceSerializer
from .utils import WorkbookError, load_services_workbook, reset_catalog

logger = logging.getLogger(__name__)


class PublicCatalogView(APIView):
    """Read-only catalog endpoints are public."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def active_services(self):
        return Service.objects.filter(is_active=True).order_by("category", "service_id")


# GET /api/services/
class ServiceListView(PublicCatalogView):
    def get(self, request):
        services = list(self.active_services())
        grouped = {
            category: ServiceSerializer(list(items), many=True).data
            for category, items in groupby(services, key=lambda s: s.category)
        }
        return Response({"success": True, "count": len(services), "services": grouped})


# GET /api/services/categories/
class ServiceCategoryListView(PublicCatalogView):
    def get(self, request):
        categories = [
            {
                "category": category,
                "label": ServiceCategory(category).label,
                "count": len(items),
                "services": ServiceMiniSerializer(items, many=True).data,
            }
            for category, items in (
                (category, list(group))
                for category, group in groupby(self.active_services(), key=lambda s: s.category)
            )
        ]
        return Response({"success": True, "categories": categories})


# GET /api/services/category/<category>/
class ServicesByCategoryView(PublicCatalogView):
    def get(self, request, category):
        services = self.active_services().filter(category=category)
        if not services.exists():
            raise NotFound("No services found for this category")
        data = ServiceSerializer(services, many=True).data
        return Response({"success": True, "count": len(data), "services": data})


# GET /api/services/id/<id>/
class ServiceByIdView(PublicCatalogView):
    def get(self, request, id):
        service = None
        if str(id).isdigit():
            service = Service.objects.filter(pk=int(id)).first()
        if service is None:
            service = self.active_services().filter(service_id=str(id).upper()).first()
        if service is None:
            raise NotFound("Service not found")
        return Response({"success": True, "service": ServiceSerializer(service).data})


# GET /api/services/<category>/<service_id>/
class ServiceByCodeView(PublicCatalogView):
    def get(self, request, category, service_id):
        service = Service.objects.filter(category=category, service_id=service_id.upper()).first()
        if service is None:
            raise NotFound("Service not found")
        return Response({"success": True, "service": ServiceSerializer(service).data})


# POST /api/services/seed/
class ServiceSeedAPIView(APIView):
    """
    Replace the catalog with the built-in services, or with the rows of an
    uploaded ``.xlsx`` file sent as ``file``.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request):
        file = request.FILES.get("file")
        errors = []

        if file is None:
            rows = SERVICES
        else:
            if not file.name.endswith(".xlsx"):
                raise ValidationError({"file": "Only .xlsx files allowed"})
            try:
                rows, errors = load_services_workbook(file)
            except WorkbookError as e:
                raise ValidationError({"file": str(e)})
            if not rows:
                raise ValidationError({"file": "No valid service rows found", "rows": errors})

        summary = reset_catalog(rows)
        logger.info("Catalog reseeded by %s (%s services)", request.user.email, summary["count"])

        return Response(
            {
                "success": True,
                "message": "Services seeded successfully",
                **summary,
                "errors": errors,
            },
            status=status.HTTP_200_OK,
        )
