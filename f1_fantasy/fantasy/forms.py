from django import forms
from fantasy.models import AssetKind, UserTeam, Driver, Engine, Chassis, BettingStatus

SELECT_CLASS = 'mt-1 block w-full rounded-md border-gray-300 shadow-sm focus:border-red-500 focus:ring-red-500'


class AssetChoiceField(forms.ModelChoiceField):
    """Shows the current market value next to each asset"""

    def label_from_instance(self, obj):
        return f"{obj.name} - {obj.value} credits"


class UserTeamForm(forms.ModelForm):
    """Form for editing a fantasy roster"""

    driver1 = AssetChoiceField(queryset=Driver.objects.none(), required=False, label='Driver 1')
    driver2 = AssetChoiceField(queryset=Driver.objects.none(), required=False, label='Driver 2')
    engine = AssetChoiceField(queryset=Engine.objects.order_by('-value'), required=False, label='Engine')
    chassis = AssetChoiceField(queryset=Chassis.objects.order_by('-value'), required=False, label='Chassis')

    class Meta:
        model = UserTeam
        fields = ['driver1', 'driver2', 'engine', 'chassis']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # Retired drivers stay valid for rosters that already hold them
        held = [d for d in (self.instance.driver1_id, self.instance.driver2_id) if d]
        drivers = Driver.objects.filter(retired=False) | Driver.objects.filter(id__in=held)
        for field_name in ['driver1', 'driver2']:
            self.fields[field_name].queryset = drivers.distinct().order_by('-value')

        for field in self.fields.values():
            field.widget.attrs['class'] = SELECT_CLASS

    def clean(self):
        cleaned_data = super().clean()

        if not BettingStatus.load().is_open:
            raise forms.ValidationError('Betting is closed. Rosters cannot be changed until it reopens.')

        drivers = [d for d in (cleaned_data.get('driver1'), cleaned_data.get('driver2')) if d]

        # Validate no newly picked retired drivers
        current = {self.instance.driver1_id, self.instance.driver2_id}
        for driver in drivers:
            if driver.retired and driver.id not in current:
                raise forms.ValidationError(f'{driver.name} is retired and cannot be selected.')

        # Validate no duplicate drivers
        driver_ids = [d.id for d in drivers]
        if len(driver_ids) != len(set(driver_ids)):
            raise forms.ValidationError('You cannot select the same driver twice.')

        # Validate no driver shared with the user's other roster
        if self.instance.user_id:
            other_teams = UserTeam.objects.filter(user_id=self.instance.user_id).exclude(pk=self.instance.pk)
            for team in other_teams:
                held_drivers = {pk for kind, pk in team.asset_ids() if kind == AssetKind.DRIVER}
                shared = set(driver_ids) & held_drivers
                if shared:
                    raise forms.ValidationError(
                        f'A selected driver is already in your {team.name} team.'
                    )

        cost = sum(
            asset.value for asset in
            drivers + [cleaned_data.get('engine'), cleaned_data.get('chassis')]
            if asset is not None
        )
        if cost > self.instance.current_credits:
            raise forms.ValidationError(
                f'Insufficient credits: roster costs {cost}, '
                f'{self.instance.current_credits} available.'
            )

        return cleaned_data
