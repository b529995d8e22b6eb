from django.contrib import admin
from .models import BloodRequest


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display = ('requester_name', 'requester_type', 'blood_group', 'units_requested', 'urgency', 'status', 'created_at')
    list_filter = ('status', 'urgency', 'blood_group', 'requester_type')
    search_fields = ('requester_name', 'requester__email', 'reason', 'location')
    readonly_fields = ('created_at', 'updated_at', 'fulfilled_at')
