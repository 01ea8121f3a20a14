from django.contrib import admin

from bookings.models import Session, Slot


class SlotInline(admin.TabularInline):
    model = Slot
    extra = 0
    ordering = ["position"]


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    list_display = ["date", "start_time", "end_time", "location", "courts", "max_slots", "is_paid"]
    list_filter = ["location", "is_paid"]
    search_fields = ["location", "account_name"]
    inlines = [SlotInline]


@admin.register(Slot)
class SlotAdmin(admin.ModelAdmin):
    list_display = ["player_name", "email", "session", "start_time", "end_time"]
    list_filter = ["session__date"]
    search_fields = ["player_name", "email"]
