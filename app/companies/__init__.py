"""
Companies app: companies, their HR members, jobs and applications.

Company HR membership is what lets a user start chats with candidates
(see chat.authorization). Application submissions and status changes are
pushed to the realtime channel and the notification dispatcher.
"""
