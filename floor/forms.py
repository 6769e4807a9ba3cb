from django import forms

from .models import INTEGER_MAX, Reservation


# ==============================================================================
# BOOKING FORM
# ==============================================================================
class BookingForm(forms.ModelForm):
    """Booking form shown on the floor board for an available table."""

    customer_name = forms.CharField(
        min_length=2,
        max_length=120,
        label="Guest name",
        error_messages={"min_length": "Name must be at least 2 characters."},
    )
    phone_number = forms.CharField(
        min_length=10,
        max_length=32,
        label="Phone number",
        error_messages={"min_length": "Enter a valid phone number."},
    )
    guest_count = forms.IntegerField(
        min_value=1,
        max_value=INTEGER_MAX,
        initial=1,
        label="Guests",
        error_messages={"min_value": "Enter the number of guests."},
    )

    class Meta:
        model = Reservation
        fields = ["customer_name", "phone_number", "guest_count", "notes"]
        widgets = {
            "notes": forms.TextInput(attrs={"placeholder": "e.g. high chair"}),
        }
        labels = {"notes": "Special requests"}

    def booking_data(self):
        """Cleaned fields in the shape ``repository.book_table`` expects."""
        return {field: self.cleaned_data.get(field) for field in self.Meta.fields}
