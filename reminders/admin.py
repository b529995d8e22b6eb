from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('donor', 'hospital', 'type', 'delivery_method', 'status', 'sent_at')
    list_filter = ('type', 'status', 'delivery_method', 'sent_at')
    search_fields = ('donor__email', 'donor__name', 'hospital__hospital_name', 'message')
    readonly_fields = ('created_at',)
