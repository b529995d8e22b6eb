from django.contrib import admin
from .models import BloodInventory


@admin.register(BloodInventory)
class BloodInventoryAdmin(admin.ModelAdmin):
    list_display = ('hospital', 'blood_group', 'units_available', 'min_threshold', 'last_updated')
    list_filter = ('blood_group',)
    search_fields = ('hospital__hospital_name', 'hospital__email', 'blood_group')
    readonly_fields = ('created_at',)
