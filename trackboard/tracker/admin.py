from django.contrib import admin
from .models import Project, Membership, Ticket, Comment, TicketHistory


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "owner_id", "created_at")
    search_fields = ("name", "owner_id")
    inlines = [MembershipInline]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("project", "user_id", "role", "joined_at")
    list_filter = ("role",)
    search_fields = ("user_id",)


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ("title", "project", "type", "priority", "status", "assignee_id", "created_at")
    list_filter = ("status", "priority", "type")
    search_fields = ("title", "description")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("id", "ticket", "author_id", "parent", "created_at")
    search_fields = ("content",)


@admin.register(TicketHistory)
class TicketHistoryAdmin(admin.ModelAdmin):
    list_display = ("ticket", "field_name", "old_value", "new_value", "user_id", "created_at")
    list_filter = ("field_name",)
