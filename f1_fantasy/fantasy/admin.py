from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.forms.models import BaseInlineFormSet
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import (
    User, Season, Engine, Chassis, Driver, Race, RaceResult,
    ValuationTableEntry, PerformanceHistory, AssetValueHistory,
    UserTeam, RosterCreditHistory, BettingStatus,
)
from .valuation import ValuationError, resubmit_stored_results


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom User admin"""
    pass


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    list_display = ['year', 'name', 'is_active', 'race_count']
    list_filter = ['is_active']
    search_fields = ['year', 'name']

    def race_count(self, obj):
        return obj.races.count()
    race_count.short_description = 'Races'


@admin.register(Engine)
class EngineAdmin(admin.ModelAdmin):
    list_display = ['name', 'value', 'chassis_count']
    search_fields = ['name']
    ordering = ['-value']

    def chassis_count(self, obj):
        return obj.chassis.count()
    chassis_count.short_description = 'Chassis'


class DriverInline(admin.TabularInline):
    """Drivers currently assigned to a chassis"""
    model = Driver
    extra = 0
    fields = ['name', 'number', 'value', 'retired']
    readonly_fields = ['value']


@admin.register(Chassis)
class ChassisAdmin(admin.ModelAdmin):
    list_display = ['name', 'engine', 'value']
    list_filter = ['engine']
    search_fields = ['name']
    ordering = ['-value']
    inlines = [DriverInline]


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ['name', 'number', 'chassis', 'value', 'retired']
    list_filter = ['retired', 'chassis', 'chassis__engine']
    search_fields = ['name', 'number']
    ordering = ['-value']


class RaceResultFormSet(BaseInlineFormSet):
    """Rejects finishing orders that repeat a position or a driver"""

    def clean(self):
        super().clean()
        positions = set()
        drivers = set()
        for form in self.forms:
            if not hasattr(form, 'cleaned_data') or not form.cleaned_data or self._should_delete_form(form):
                continue
            position = form.cleaned_data.get('position')
            driver = form.cleaned_data.get('driver')
            if position in positions:
                raise ValidationError(f'Position {position} is used more than once.')
            if driver in drivers:
                raise ValidationError(f'{driver.name} appears more than once.')
            positions.add(position)
            drivers.add(driver)


class RaceResultInline(admin.TabularInline):
    """
    Finishing order of a race. After editing, use the
    "Recompute valuations" action to value the race.
    """
    model = RaceResult
    formset = RaceResultFormSet
    extra = 0
    fields = ['position', 'driver', 'valuation']
    readonly_fields = ['valuation']
    ordering = ['position']


@admin.register(Race)
class RaceAdmin(admin.ModelAdmin):
    list_display = [
        'round_number', 'name', 'season', 'location', 'country',
        'race_date', 'results_submitted'
    ]
    list_filter = ['season', 'results_submitted', 'country']
    search_fields = ['name', 'location', 'country']
    ordering = ['season', 'round_number']
    readonly_fields = ['results_submitted']
    inlines = [RaceResultInline]
    actions = ['recompute_valuations']

    fieldsets = (
        ('Basic Info', {
            'fields': ('season', 'name', 'round_number')
        }),
        ('Location', {
            'fields': ('location', 'country')
        }),
        ('Dates', {
            'fields': ('race_date',)
        }),
        ('Valuation', {
            'fields': ('results_submitted',)
        }),
    )

    def save_formset(self, request, form, formset, change):
        if formset.model is not RaceResult:
            return super().save_formset(request, form, formset, change)

        instances = formset.save(commit=False)
        for obj in formset.deleted_objects:
            obj.delete()

        # Edited rows are rewritten in one go so swapped places or drivers do not collide
        edited = [obj.pk for obj in instances if obj.pk]
        RaceResult.objects.filter(pk__in=edited).delete()
        for obj in instances:
            obj.save(force_insert=obj.pk in edited)
        formset.save_m2m()

    @admin.action(description='Recompute valuations from stored results')
    def recompute_valuations(self, request, queryset):
        for race in queryset.order_by('race_date', 'round_number'):
            try:
                report = resubmit_stored_results(race.id)
            except ValuationError as e:
                self.message_user(request, f"{race}: {e}", level=messages.ERROR)
                continue
            summary = report.summary()
            self.message_user(
                request,
                f"{race}: valued {summary['drivers_valued']} drivers, "
                f"updated {summary['rosters_updated']} rosters",
                level=messages.SUCCESS,
            )


@admin.register(ValuationTableEntry)
class ValuationTableEntryAdmin(admin.ModelAdmin):
    list_display = ['difference', 'percentage_change', 'description']
    list_editable = ['percentage_change']
    ordering = ['difference']

    def has_delete_permission(self, request, obj=None):
        return False


class HistoryAdmin(admin.ModelAdmin):
    """History rows are written by the valuation engine only"""
    list_filter = ['kind', 'race__season', 'race']
    search_fields = ['driver__name', 'engine__name', 'chassis__name', 'race__name']
    readonly_fields = ['created_at']

    def get_asset(self, obj):
        return obj.asset
    get_asset.short_description = 'Asset'

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(PerformanceHistory)
class PerformanceHistoryAdmin(HistoryAdmin):
    list_display = ['race', 'kind', 'get_asset', 'position']


@admin.register(AssetValueHistory)
class AssetValueHistoryAdmin(HistoryAdmin):
    list_display = ['race', 'kind', 'get_asset', 'previous_value', 'value', 'delta_display']

    def delta_display(self, obj):
        return f"{obj.delta:+d}"
    delta_display.short_description = 'Change'


class RosterCreditHistoryInline(admin.TabularInline):
    model = RosterCreditHistory
    extra = 0
    fields = ['race', 'credits_gained', 'credits_after']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(UserTeam)
class UserTeamAdmin(admin.ModelAdmin):
    list_display = ['user', 'name', 'initial_credits', 'current_credits', 'updated_at']
    list_filter = ['name']
    search_fields = ['user__username']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [RosterCreditHistoryInline]

    fieldsets = (
        ('Owner', {
            'fields': ('user', 'name')
        }),
        ('Roster', {
            'fields': ('driver1', 'driver2', 'engine', 'chassis')
        }),
        ('Credits', {
            'fields': ('initial_credits', 'current_credits')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(BettingStatus)
class BettingStatusAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'is_open', 'updated_at']

    def has_add_permission(self, request):
        return not BettingStatus.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
