from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    model = User
    list_display = ('username', 'email', 'name', 'role', 'blood_group', 'verified')
    list_filter = ('role', 'blood_group', 'verified')
    search_fields = ('username', 'email', 'name', 'hospital_name')
    fieldsets = DjangoUserAdmin.fieldsets + (
        ('RaktSetu', {'fields': ('name', 'phone', 'location', 'role', 'verified')}),
        ('Donor', {'fields': ('blood_group', 'last_donation_date', 'total_donations')}),
        ('Hospital', {'fields': ('hospital_name', 'license')}),
    )
