from django.contrib import admin
from .models import Hospital


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('name', 'city', 'state', 'type', 'has_blood_bank', 'is_active', 'verified')
    list_filter = ('type', 'city', 'has_blood_bank', 'is_active', 'verified')
    search_fields = ('name', 'city', 'address', 'state')
    readonly_fields = ('created_at', 'updated_at')
