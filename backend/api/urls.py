from django.urls import path

from . import resource_views, upload_views, views

# Resource kinds served by the generic CRUD routes: (url segment, registry name)
_RESOURCES = [
    ("users", "users"),
    ("tracks", "tracks"),
    ("genres", "genres"),
    ("beats", "beats"),
    ("tags", "tags"),
    ("sound-kits", "sound-kits"),
    ("sound-kit-categories", "sound-kit-categories"),
    ("sound-kit-tags", "sound-kit-tags"),
]

urlpatterns = [
    # Accounts
    path("signup", views.signup),
    path("signin", views.signin),
    path("profile/<str:user_id>", views.update_profile),

    # Create-with-files (multipart); must precede the generic <pk> routes
    path("tracks/upload", upload_views.track_with_files),
    path("sound-kits/upload", upload_views.sound_kit_with_files),

    # File storage
    path("upload-image", upload_views.upload_image),
    path("upload-audio", upload_views.upload_audio),
    path("file", upload_views.file_detail),
    path("file/<path:file_path>", upload_views.file_detail),
    path("files", upload_views.files_list),
    path("storage/config", upload_views.storage_config),
    path("storage/test", upload_views.storage_test),

    # Musicians (derived from tracks)
    path("musicians", views.musicians_list),
    path("musicians/<str:name>", views.musician_detail),

    path("health", views.health),
]

for segment, name in _RESOURCES:
    urlpatterns += [
        path(f"{segment}", resource_views.collection, {"resource": name}),
        path(f"{segment}/<str:pk>", resource_views.detail, {"resource": name}),
    ]
